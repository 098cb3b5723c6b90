from .base import Base
from .step_ingredient_association import step_ingredient_association

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship


class RecipeStep(Base):
    __tablename__ = "recipe_steps"

    id = Column(Integer, primary_key=True)
    step_order = Column(Integer, nullable=False)
    title = Column(String(255))
    description = Column(String(1000))
    duration_minutes = Column(Integer)
    image_url = Column(String(255))

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), index=True, nullable=False)
    recipe = relationship("Recipe", back_populates="steps")

    ingredients = relationship(
        "Ingredient",
        secondary=step_ingredient_association,
        order_by="Ingredient.id",
        lazy="selectin",
    )
