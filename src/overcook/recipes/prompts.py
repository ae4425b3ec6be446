"""
Prompt templates for recipe generation and recipe chat.
"""

from overcook.recipes.models import GenerationCriteria, Recipe

GENERATION_SYSTEM_PROMPT = """You are an expert chef specializing in creative leftover recipes and food waste reduction.
Your mission is to transform leftover ingredients into delicious, restaurant-quality meals.

Core Principles:
- Maximize use of all provided ingredients, especially leftovers
- Create recipes that breathe new life into day-old or leftover foods
- Suggest creative flavor combinations that mask "leftover taste"
- Provide tips for reviving textures (crispy, fresh, tender)
- Focus on practical, achievable recipes for home cooks
- Ensure food safety when working with leftovers

Always prioritize creativity and flavor while minimizing waste."""

GENERATION_USER_TEMPLATE = """Create 3-5 creative recipe suggestions using these leftover ingredients and items: {ingredients}.

IMPORTANT: Treat these as leftover or surplus ingredients that need to be used creatively.
Focus on recipes that transform leftovers into exciting new dishes.{avoid_note}

Available equipment: {equipment}
{seasonings_note}

Preferences:
- {cuisine_filter}
- Calories: {calories_min}-{calories_max} kcal per serving
- Preparation time: {time_min}-{time_max} minutes{dietary_note}

For each recipe, provide:
1. A creative, appetizing title
2. Brief description (1-2 sentences)
3. Cuisine type
4. Preparation time (in minutes)
5. Estimated calories per serving
6. List of all ingredients needed (including common seasonings)
7. Required equipment
8. Step-by-step cooking instructions

Return a JSON object with a "recipes" array. Each recipe has: "title",
"description", "cuisineType", "prepTime" (number), "calories" (number),
"ingredients" (array of strings), "equipment" (array of strings),
"instructions" (array of strings)."""

CHAT_SYSTEM_TEMPLATE = """You are a friendly cooking assistant helping someone cook "{title}".
Answer questions about modifications, substitutions, techniques, timing and food safety.
Keep answers short and practical. If a question has nothing to do with cooking, steer back to the recipe.

Ingredients:
{ingredients}

Instructions:
{instructions}"""

CHAT_GREETING = (
    "Hi! I'm your cooking assistant. Ask me anything about this recipe - "
    "modifications, substitutions, cooking tips, or any questions you have!"
)


def build_generation_prompt(criteria: GenerationCriteria, existing_titles: list[str] | None = None) -> str:
    """Render the user prompt for one generation request."""
    prefs = criteria.preferences

    if prefs.cuisine_type:
        cuisine_filter = f"Focus on these cuisine types: {', '.join(prefs.cuisine_type)}."
    else:
        cuisine_filter = "Any cuisine type is acceptable."

    if criteria.common_seasonings:
        seasonings_note = f"Common seasonings available: {', '.join(criteria.common_seasonings)}"
    else:
        seasonings_note = "Assume basic seasonings are available"

    avoid_note = ""
    if existing_titles:
        avoid_note = (
            "\nIMPORTANT: Avoid creating recipes similar to these already shown recipes: "
            f"{', '.join(existing_titles)}.\n"
            "Create completely different dishes with unique cooking methods and flavor profiles."
        )

    dietary_note = ""
    if prefs.dietary_restrictions:
        dietary_note = f"\n- Dietary restrictions (must follow): {', '.join(prefs.dietary_restrictions)}"

    return GENERATION_USER_TEMPLATE.format(
        ingredients=", ".join(criteria.ingredients),
        avoid_note=avoid_note,
        equipment=", ".join(criteria.equipment) or "basic kitchen tools",
        seasonings_note=seasonings_note,
        cuisine_filter=cuisine_filter,
        calories_min=prefs.calorie_range[0],
        calories_max=prefs.calorie_range[1],
        time_min=prefs.time_range[0],
        time_max=prefs.time_range[1],
        dietary_note=dietary_note,
    )


def build_chat_system_prompt(recipe: Recipe) -> str:
    """Inject the recipe being discussed into the chat system prompt."""
    ingredients = "\n".join(f"- {i}" for i in recipe.ingredients) or "- (none listed)"
    instructions = "\n".join(f"{n}. {step}" for n, step in enumerate(recipe.instructions, 1)) or "(none listed)"
    return CHAT_SYSTEM_TEMPLATE.format(
        title=recipe.title,
        ingredients=ingredients,
        instructions=instructions,
    )
