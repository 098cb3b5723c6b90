import enum


class DifficultyLevel(str, enum.Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class RecipeCategory(str, enum.Enum):
    PASTA = "PASTA"
    MEAT = "MEAT"
    VEGETARIAN = "VEGETARIAN"
    DESSERT = "DESSERT"
    SOUP = "SOUP"
    SALAD = "SALAD"
