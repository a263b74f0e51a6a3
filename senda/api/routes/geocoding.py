"""
Geocodificación de direcciones de instituciones.

Used by the registration wizard, the admin network view and the admin panel
to place an institution on the map before it is saved.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from senda.api.deps import get_address_resolver
from senda.schemas.geocode import (
    AddressParts,
    AddressResolveRequest,
    AddressResolveResponse,
)
from senda.services.address_resolution import AddressResolver
from senda.utils.geo import split_address

router = APIRouter()

NOT_FOUND_MESSAGE = (
    "No se pudo obtener la ubicación. Ingresá las coordenadas manualmente."
)


@router.post(
    "/resolve",
    response_model=AddressResolveResponse,
    summary="Resolver dirección a coordenadas",
    description=(
        "Walks the geocoding ladder (street + number + postal code down to "
        "the city centroid). A miss is not an error: `found` is false and the "
        "client should ask for manual coordinates."
    ),
)
async def resolve_address(
    payload: AddressResolveRequest,
    resolver: AddressResolver = Depends(get_address_resolver),
) -> AddressResolveResponse:
    coordinates = await resolver.resolve_query(payload.to_query())
    if coordinates is None:
        return AddressResolveResponse(found=False, message=NOT_FOUND_MESSAGE)
    return AddressResolveResponse(found=True, coordinates=coordinates)


@router.get(
    "/split",
    response_model=AddressParts,
    summary="Separar calle y altura",
)
def split_full_address(
    address: str = Query(..., max_length=300),
) -> AddressParts:
    return AddressParts(**split_address(address))
