"""
Meal planner endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from backend.dependencies import get_meals_screen
from backend.responses import to_schema
from backend.schemas import MealCreate, MealUpdate, ScreenResponseSchema
from familyhub.screens import MealsScreen

router = APIRouter(prefix="/meals", tags=["meals"])


@router.get("/", response_model=ScreenResponseSchema)
def list_meals(
    date: Optional[str] = Query(None, description="Selected day; the week around it is returned"),
    screen: MealsScreen = Depends(get_meals_screen),
):
    """Meals for the seven days centred on ``date`` (today by default)."""
    context = {"date": date} if date else {}
    return to_schema(screen.process("list", context))


@router.get("/date/{day}", response_model=ScreenResponseSchema)
def meals_on_day(day: str, screen: MealsScreen = Depends(get_meals_screen)):
    return to_schema(screen.process("by_date", {"date": day}))


@router.get("/slot", response_model=ScreenResponseSchema)
def meal_slot(
    date: str = Query(...),
    meal_type: str = Query(...),
    screen: MealsScreen = Depends(get_meals_screen),
):
    """The meal planned for one day and meal type, from the loaded week."""
    return to_schema(screen.process("slot", {"date": date, "meal_type": meal_type}))


@router.get("/{meal_id}", response_model=ScreenResponseSchema)
def get_meal(meal_id: str, screen: MealsScreen = Depends(get_meals_screen)):
    return to_schema(screen.process("get", {"id": meal_id}), failure_status=404)


@router.post("/", response_model=ScreenResponseSchema, status_code=201)
def create_meal(meal: MealCreate, screen: MealsScreen = Depends(get_meals_screen)):
    context = {k: v for k, v in meal.model_dump().items() if v is not None}
    return to_schema(screen.process("create", context))


@router.put("/{meal_id}", response_model=ScreenResponseSchema)
def update_meal(meal_id: str, meal: MealUpdate, screen: MealsScreen = Depends(get_meals_screen)):
    context = {"id": meal_id}
    context.update(meal.model_dump(exclude_unset=True))
    return to_schema(screen.process("update", context))


@router.delete("/{meal_id}", response_model=ScreenResponseSchema)
def delete_meal(
    meal_id: str,
    confirmed: bool = Query(False, description="Must be true to delete"),
    screen: MealsScreen = Depends(get_meals_screen),
):
    return to_schema(screen.process("delete", {"id": meal_id, "confirmed": confirmed}))
