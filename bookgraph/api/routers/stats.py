"""
Catalog statistics API endpoint.

Routes: GET /stats

Dependencies: bookgraph.core.relationship_resolver
System role: Catalog aggregates HTTP API
"""

from fastapi import APIRouter, Depends

from bookgraph.api.deps.dependencies import get_relationship_resolver
from bookgraph.core.relationship_resolver import RelationshipResolver
from bookgraph.models.common import CatalogStatisticsResponse

from .router_utils.error_handling import handle_domain_errors
from .router_utils.responses import map_statistics_to_response

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=CatalogStatisticsResponse)
@handle_domain_errors
async def get_statistics(
    resolver: RelationshipResolver = Depends(get_relationship_resolver),
) -> CatalogStatisticsResponse:
    """Total counts, average price, most expensive and newest book."""
    return map_statistics_to_response(await resolver.catalog_statistics())
