"""Static recipe templates for the rule-based suggestion generator.

Each template lists one or more keyword patterns. A pattern matches when every keyword
is a substring of some available product name; patterns are tried in order.
"""

from pydantic import BaseModel, Field

from src.domain.suggestion import TimeRange


class RecipeTemplate(BaseModel):
    """Recipe that can be suggested when one of its patterns matches the pantry."""

    title: str
    patterns: list[list[str]] = Field(..., min_length=1, description="Alternative keyword combinations")
    time_range: TimeRange
    steps: list[str]


RECIPE_TEMPLATES: list[RecipeTemplate] = [
    RecipeTemplate(
        title="Arroz con pollo",
        patterns=[["chicken", "rice"], ["pollo", "arroz"]],
        time_range=TimeRange.MEDIUM,
        steps=["Cocina el pollo", "Hierve el arroz", "Mezcla todo"],
    ),
    RecipeTemplate(
        title="Pasta con tomate",
        patterns=[["pasta", "tomato"], ["pasta", "tomate"], ["spaghetti", "tomato"]],
        time_range=TimeRange.QUICK,
        steps=["Hierve la pasta", "Calienta la salsa", "Mezcla"],
    ),
    RecipeTemplate(
        title="Tortilla de patatas",
        patterns=[["eggs", "potato"], ["huevos", "patata"]],
        time_range=TimeRange.MEDIUM,
        steps=["Fríe las patatas", "Bate los huevos", "Cocina la tortilla"],
    ),
    RecipeTemplate(
        title="Ensalada de pollo",
        patterns=[["chicken", "lettuce"], ["pollo", "lechuga"]],
        time_range=TimeRange.QUICK,
        steps=["Cocina el pollo", "Corta la lechuga", "Mezcla con aliño"],
    ),
    RecipeTemplate(
        title="Sopa de verduras",
        patterns=[["carrot", "onion"], ["zanahoria", "cebolla"], ["vegetables", "broth"]],
        time_range=TimeRange.MEDIUM,
        steps=["Corta las verduras", "Hierve con caldo", "Cocina 20 min"],
    ),
    RecipeTemplate(
        title="Huevos revueltos",
        patterns=[["eggs"], ["huevos"]],
        time_range=TimeRange.QUICK,
        steps=["Bate los huevos", "Cocina a fuego medio", "Remueve constantemente"],
    ),
    RecipeTemplate(
        title="Arroz blanco",
        patterns=[["rice"], ["arroz"]],
        time_range=TimeRange.QUICK,
        steps=["Hierve agua", "Añade arroz", "Cocina 15 min"],
    ),
    RecipeTemplate(
        title="Pasta al aglio e olio",
        patterns=[["pasta", "garlic", "olive oil"], ["pasta", "ajo", "aceite"]],
        time_range=TimeRange.QUICK,
        steps=["Hierve la pasta", "Fríe el ajo", "Mezcla con aceite"],
    ),
    RecipeTemplate(
        title="Pollo al horno",
        patterns=[["chicken"], ["pollo"]],
        time_range=TimeRange.LONG,
        steps=["Sazona el pollo", "Precalienta el horno", "Hornea 30-40 min"],
    ),
    RecipeTemplate(
        title="Sándwich",
        patterns=[["bread", "cheese"], ["pan", "queso"], ["bread", "ham"]],
        time_range=TimeRange.QUICK,
        steps=["Pon los ingredientes en el pan", "Opcional: tuéstalo"],
    ),
]
