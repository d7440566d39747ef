"""Sam Kitchen: ingredient-driven recipe generation backed by Gemini."""
