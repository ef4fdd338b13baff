"""Coupon API endpoints."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from coupon_api.core.dependencies import get_coupon_service
from coupon_api.schemas.coupon import CouponCreate, CouponUpdate
from coupon_api.schemas.response import APIResponse
from coupon_api.services.coupon_service import CouponService, ServiceResult

router = APIRouter()


def _envelope(result: ServiceResult) -> JSONResponse:
    response = result.response
    # 204 responses have no body; the envelope goes out as a 200
    status_code = 200 if response.status_code == 204 else response.status_code
    return JSONResponse(status_code=status_code, content=response.to_content())


@router.get(
    "",
    response_model=APIResponse,
    summary="List coupons",
    responses={500: {"description": "Storage error"}},
)
async def list_coupons(
    service: CouponService = Depends(get_coupon_service),
) -> JSONResponse:
    """List every coupon."""
    return _envelope(service.list_coupons())


@router.get(
    "/{coupon_id}",
    response_model=APIResponse,
    name="get_coupon",
    summary="Get coupon",
    responses={404: {"description": "Coupon not found"}},
)
async def get_coupon(
    coupon_id: int,
    service: CouponService = Depends(get_coupon_service),
) -> JSONResponse:
    """Get a coupon by ID."""
    return _envelope(service.get_coupon(coupon_id))


@router.post(
    "",
    response_model=APIResponse,
    status_code=201,
    summary="Create coupon",
    responses={400: {"description": "Validation error"}},
)
async def create_coupon(
    data: CouponCreate,
    request: Request,
    service: CouponService = Depends(get_coupon_service),
) -> JSONResponse:
    """Create a new coupon."""
    result = service.create_coupon(data)
    response = _envelope(result)
    if result.created_id is not None:
        response.headers["Location"] = str(
            request.url_for("get_coupon", coupon_id=result.created_id)
        )
    return response


@router.put(
    "/{coupon_id}",
    response_model=APIResponse,
    status_code=202,
    summary="Update coupon",
    responses={400: {"description": "Invalid id or validation error"}},
)
async def update_coupon(
    coupon_id: int,
    data: CouponUpdate,
    service: CouponService = Depends(get_coupon_service),
) -> JSONResponse:
    """Update a coupon's name and percent."""
    return _envelope(service.update_coupon(coupon_id, data))


@router.delete(
    "/{coupon_id}",
    response_model=APIResponse,
    summary="Delete coupon",
    responses={400: {"description": "Invalid id"}},
)
async def delete_coupon(
    coupon_id: int,
    service: CouponService = Depends(get_coupon_service),
) -> JSONResponse:
    """Delete a coupon by ID."""
    return _envelope(service.delete_coupon(coupon_id))
