SYSTEM = """
You are a family balance coach helping two parents share household and parenting work.
Be warm, practical and non-judgmental. Never blame either parent.
Do not invent facts. If inputs are missing, say so.
Output must be valid JSON only.
"""

TASK_RUBRIC = """
Suggest concrete, small tasks that shift load from the parent carrying more
toward the parent carrying less, focusing on the most imbalanced categories.

Return a JSON list. Each item has keys:
title (short, imperative), description (2-3 sentences), category (one of the category names above).
"""


def make_task_prompt(week: int, limit: int, overall: str, categories: str, heavy_tasks: str) -> str:
    return f"""
Week: {week}
Number of tasks: {limit}

Overall split:
{overall}

Category balance:
{categories}

Heaviest tasks handled by the busier parent:
{heavy_tasks}

{TASK_RUBRIC}
"""
