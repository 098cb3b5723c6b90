from .base import Base

from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Float)
    unit = Column(String(50))

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), index=True, nullable=False)
    recipe = relationship("Recipe", back_populates="ingredients")

    def matches(self, other) -> bool:
        return (
            self.name == other.name
            and self.quantity == other.quantity
            and self.unit == other.unit
        )
