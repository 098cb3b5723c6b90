from datetime import datetime, timezone

from .base import Base
from .enums import DifficultyLevel, RecipeCategory
from .ingredient import Ingredient
from .recipe_image import RecipeImage
from .recipe_step import RecipeStep

from sqlalchemy import Column, DateTime, Enum, Integer, String
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), index=True, nullable=False)
    difficulty = Column(Enum(DifficultyLevel, name="difficulty_level"))
    category = Column(Enum(RecipeCategory, name="recipe_category"), index=True)
    prep_time_minutes = Column(Integer)
    total_time_minutes = Column(Integer, nullable=False, default=0)
    date_created = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    ingredients = relationship(
        "Ingredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="Ingredient.id",
        lazy="selectin",
    )
    steps = relationship(
        "RecipeStep",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeStep.id",
        lazy="selectin",
    )
    images = relationship(
        "RecipeImage",
        cascade="all, delete-orphan",
        order_by="RecipeImage.position",
        collection_class=ordering_list("position"),
        lazy="selectin",
    )

    # plain list of filenames backed by the recipe_images rows
    image_urls = association_proxy(
        "images", "image_url", creator=lambda url: RecipeImage(image_url=url)
    )

    def __init__(self, **kwargs):
        # mirror the column default so the timestamp exists before the first flush
        kwargs.setdefault("date_created", _utcnow())
        super().__init__(**kwargs)

    def add_ingredient(self, ingredient: Ingredient) -> None:
        self.ingredients.append(ingredient)
        ingredient.recipe = self

    def add_step(self, step: RecipeStep) -> None:
        self.steps.append(step)
        step.recipe = self
