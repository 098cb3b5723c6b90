"""Create recipe, ingredient, step and image tables

Revision ID: 5c1e2f9a7b3d
Revises:
Create Date: 2026-01-12 10:04:37.218113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5c1e2f9a7b3d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

difficulty_level = sa.Enum('EASY', 'MEDIUM', 'HARD', name='difficulty_level')
recipe_category = sa.Enum('PASTA', 'MEAT', 'VEGETARIAN', 'DESSERT', 'SOUP', 'SALAD', name='recipe_category')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'recipes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('difficulty', difficulty_level, nullable=True),
        sa.Column('category', recipe_category, nullable=True),
        sa.Column('prep_time_minutes', sa.Integer(), nullable=True),
        sa.Column('total_time_minutes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('date_created', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_recipes_title', 'recipes', ['title'])
    op.create_index('ix_recipes_category', 'recipes', ['category'])

    op.create_table(
        'ingredients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=True),
        sa.Column('unit', sa.String(length=50), nullable=True),
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_ingredients_recipe_id', 'ingredients', ['recipe_id'])

    op.create_table(
        'recipe_steps',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('step_order', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('description', sa.String(length=1000), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('image_url', sa.String(length=255), nullable=True),
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('ix_recipe_steps_recipe_id', 'recipe_steps', ['recipe_id'])

    op.create_table(
        'recipe_images',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(length=255), nullable=False),
    )
    op.create_index('ix_recipe_images_recipe_id', 'recipe_images', ['recipe_id'])

    op.create_table(
        'step_ingredients',
        sa.Column('step_id', sa.Integer(), sa.ForeignKey('recipe_steps.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('ingredient_id', sa.Integer(), sa.ForeignKey('ingredients.id', ondelete='CASCADE'), primary_key=True),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('step_ingredients')
    op.drop_index('ix_recipe_images_recipe_id', table_name='recipe_images')
    op.drop_table('recipe_images')
    op.drop_index('ix_recipe_steps_recipe_id', table_name='recipe_steps')
    op.drop_table('recipe_steps')
    op.drop_index('ix_ingredients_recipe_id', table_name='ingredients')
    op.drop_table('ingredients')
    op.drop_index('ix_recipes_category', table_name='recipes')
    op.drop_index('ix_recipes_title', table_name='recipes')
    op.drop_table('recipes')
    recipe_category.drop(op.get_bind(), checkfirst=True)
    difficulty_level.drop(op.get_bind(), checkfirst=True)
