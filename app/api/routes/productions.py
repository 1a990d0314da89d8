"""Production API endpoints.

Responses never carry crew or cast phone numbers unless the caller has
authenticated against the production with a matching phone number.
"""

from typing import Annotated, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.dependencies import get_enrichment_service, get_production_service
from app.core.exceptions import APIClientError, AppError, NotFoundError
from app.models.callsheet import AuthenticationResult, Production, ProductionCatalog
from app.models.requests import AuthenticateRequest
from app.models.response import EnrichResponse
from app.services.access.access_service import authenticate, sanitize
from app.services.callsheet.production_service import ProductionService
from app.services.enrichment.enrichment_service import EnrichmentService
from app.services.enrichment.gate import needs_enrichment
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


def _raise_http_error(error: AppError, message: str) -> NoReturn:
    if isinstance(error, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, APIClientError):
        status_code = status.HTTP_502_BAD_GATEWAY
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    raise HTTPException(
        status_code=status_code,
        detail={"error": type(error).__name__, "message": message},
    ) from error


async def _load_production(
    production_id: str,
    production_service: ProductionService,
    enrichment_service: EnrichmentService,
    enrich: bool,
) -> Production:
    """Load a production, enriching it when asked and when any location needs it.

    Enrichment failures degrade to the unenriched production.
    """
    try:
        production = await production_service.get_production(production_id)
    except AppError as e:
        LOGGER.error(f"Error fetching production: {e}", extra={"production_id": production_id})
        _raise_http_error(e, "Failed to fetch production")

    if enrich and any(needs_enrichment(location.gem_data) for location in production.locations):
        LOGGER.info("Production needs enrichment, calling knowledge service...")
        try:
            production = await enrichment_service.enrich(production)
        except AppError as e:
            LOGGER.error(
                f"Enrichment failed, serving unenriched production: {e}",
                extra={"production_id": production_id},
            )
    return production


@router.get(
    "/productions",
    response_model=ProductionCatalog,
    summary="List productions",
    description="List every production, grouped by title with one entry per shoot day",
    operation_id="list_productions",
)
async def list_productions(
    production_service: Annotated[ProductionService, Depends(get_production_service)],
) -> ProductionCatalog:
    try:
        catalog = await production_service.list_productions()
    except AppError as e:
        LOGGER.error(f"Error fetching productions: {e}")
        _raise_http_error(e, "Failed to fetch productions")

    return ProductionCatalog(
        productions=[sanitize(production) for production in catalog.productions],
        grouped=catalog.grouped,
    )


@router.get(
    "/production/{production_id}",
    response_model=Production,
    summary="Get a production",
    description="Get a single production without contact numbers, enriching locations when needed",
    operation_id="get_production",
)
async def get_production(
    production_id: str,
    production_service: Annotated[ProductionService, Depends(get_production_service)],
    enrichment_service: Annotated[EnrichmentService, Depends(get_enrichment_service)],
    enrich: Annotated[bool, Query(description="Enrich locations with missing data")] = True,
) -> Production:
    production = await _load_production(production_id, production_service, enrichment_service, enrich)
    return sanitize(production)


@router.post(
    "/production/{production_id}/enrich",
    response_model=EnrichResponse,
    summary="Force re-enrichment",
    description="Discard existing location enrichment and fetch it again",
    operation_id="enrich_production",
)
async def enrich_production(
    production_id: str,
    production_service: Annotated[ProductionService, Depends(get_production_service)],
    enrichment_service: Annotated[EnrichmentService, Depends(get_enrichment_service)],
) -> EnrichResponse:
    try:
        production = await production_service.get_production(production_id)
        production = await enrichment_service.enrich(production, force=True)
    except AppError as e:
        LOGGER.error(f"Error enriching production: {e}", extra={"production_id": production_id})
        _raise_http_error(e, "Failed to enrich production")

    return EnrichResponse(success=True, production=sanitize(production))


@router.post(
    "/production/{production_id}/authenticate",
    response_model=AuthenticationResult,
    summary="Authenticate by phone number",
    description=(
        "Match the phone number against crew and cast. A match returns the full "
        "call sheet; otherwise the redacted call sheet is returned."
    ),
    operation_id="authenticate_production",
)
async def authenticate_production(
    production_id: str,
    request: AuthenticateRequest,
    production_service: Annotated[ProductionService, Depends(get_production_service)],
    enrichment_service: Annotated[EnrichmentService, Depends(get_enrichment_service)],
    enrich: Annotated[bool, Query(description="Enrich locations with missing data")] = True,
) -> AuthenticationResult:
    production = await _load_production(production_id, production_service, enrichment_service, enrich)
    return authenticate(production, request.phone)
