"""
Registry-wide endpoints.
No authentication required.
"""

from fastapi import APIRouter

from app.dependencies import Registry
from app.schemas.asset import RegistryMetricsResponse

router = APIRouter()


@router.get("/metrics", response_model=RegistryMetricsResponse)
async def get_registry_metrics(service: Registry):
    """
    Infrastructure metrics.

    Returns the number of assets ever registered (the id counter),
    the registry authority and the current block height.
    """
    metrics = await service.get_metrics()
    return {
        "totalCount": metrics.total_count,
        "authority": metrics.authority,
        "blockHeight": metrics.block_height,
    }
