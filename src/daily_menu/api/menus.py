"""Menu, food catalog and nutrition endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from daily_menu.api.schemas import (
    GenerateMenuRequest,
    NutritionMetricsRequest,
)
from daily_menu.domain.errors import (
    FoodsUnavailableError,
    NutritionProfileMissingError,
)
from daily_menu.services import nutrition

if TYPE_CHECKING:
    from daily_menu.containers import AppContainer
    from daily_menu.domain.foods import Food
    from daily_menu.domain.menus import GeneratedMenu, Meal

INVALID_DATE = "Invalid date format. Use YYYY-MM-DD."
ONBOARDING_REQUIRED = "Please complete onboarding before generating menus."
GENERATION_FAILED = "Failed to generate menu. Please try again."
FOODS_FAILED = "Failed to fetch foods. Please try again."

_logger = logging.getLogger(__name__)


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(dependencies=[Depends(require_api_token)])


@router.post("/users/{user_id}/menus/generate")
def generate_menu(
    user_id: UUID, request: Request, payload: GenerateMenuRequest | None = None
) -> JSONResponse:
    """Generate the user's menu for a day, or return the stored one."""
    container: AppContainer = request.app.state.container
    if payload is None or payload.date is None:
        day = datetime.now(tz=ZoneInfo(container.settings.menu_timezone)).date()
    else:
        try:
            day = date.fromisoformat(payload.date)
        except ValueError:
            return _error(status.HTTP_400_BAD_REQUEST, INVALID_DATE)

    try:
        menu = container.menu_service.generate(user_id, day)
    except NutritionProfileMissingError:
        return _error(status.HTTP_400_BAD_REQUEST, ONBOARDING_REQUIRED)
    except FoodsUnavailableError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except Exception:
        _logger.exception("Menu generation failed: user=%s date=%s", user_id, day)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERATION_FAILED)

    return JSONResponse(
        {"message": "Menu generated successfully", "menu": serialize_menu(menu)}
    )


@router.get("/foods")
def list_foods(request: Request) -> JSONResponse:
    """Return the full food catalog."""
    container: AppContainer = request.app.state.container
    try:
        foods = container.catalog_service.list_foods()
    except Exception:
        _logger.exception("Food catalog read failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, FOODS_FAILED)
    return JSONResponse({"foods": [serialize_food(food) for food in foods]})


@router.post("/nutrition/metrics")
def nutrition_metrics(payload: NutritionMetricsRequest) -> dict[str, object]:
    """Compute BMR, TDEE and daily macro targets from body data."""
    return {"metrics": asdict(nutrition.calculate_all(payload.to_domain()))}


def serialize_menu(menu: GeneratedMenu) -> dict[str, object]:
    """Render a menu in the public response shape."""
    return {
        "id": str(menu.id),
        "date": menu.date.isoformat(),
        "meals": [_serialize_meal(meal) for meal in menu.meals],
        "totals": menu.totals.as_dict(),
    }


def serialize_food(food: Food) -> dict[str, object]:
    return {
        "id": str(food.id),
        "name": food.name,
        "category": food.category.value,
        "calories": food.calories,
        "protein": food.protein,
        "carbs": food.carbs,
        "fat": food.fat,
        "fiber": food.fiber,
        "tags": list(food.tags),
        "default_serving_grams": food.default_serving_grams,
        "density_factor": food.density_factor,
    }


def _serialize_meal(meal: Meal) -> dict[str, object]:
    return {
        "type": meal.type.value,
        "items": [
            {
                "food": serialize_food(item.food),
                "grams": item.grams,
                **item.macros.as_dict(),
            }
            for item in meal.items
        ],
        "totals": meal.totals.as_dict(),
    }


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)
