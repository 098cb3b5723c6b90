from sqlalchemy import Table, Column, Integer, ForeignKey
from .base import Base

# which of the recipe's own ingredients a step uses
step_ingredient_association = Table(
    "step_ingredients",
    Base.metadata,
    Column("step_id", Integer, ForeignKey("recipe_steps.id", ondelete="CASCADE"), primary_key=True),
    Column("ingredient_id", Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), primary_key=True),
)
