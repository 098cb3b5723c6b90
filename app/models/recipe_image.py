from .base import Base

from sqlalchemy import Column, ForeignKey, Integer, String


class RecipeImage(Base):
    __tablename__ = "recipe_images"

    id = Column(Integer, primary_key=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), index=True, nullable=False)
    position = Column(Integer, nullable=False)
    image_url = Column(String(255), nullable=False)
