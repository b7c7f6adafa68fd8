"""
Location → product aggregation of parsed assets.

Locations and product groups are sorted by their end date (soonest first)
so the most urgent items appear at the top. All sorts are stable: ties
keep the order in which the assets appeared in the export.
"""

import logging
from typing import Dict, Iterable, List

from src.timeline.store import LocationGroup, ParsedAssetRecord, ProductGroup

logger = logging.getLogger(__name__)


def _build_product_group(product_name: str, assets: List[ParsedAssetRecord]) -> ProductGroup:
    ordered = sorted(assets, key=lambda a: a.contract_end)
    return ProductGroup(
        product_name=product_name,
        assets=ordered,
        group_start=min(a.install_date for a in ordered),
        group_end=max(a.contract_end for a in ordered),
    )


def group_assets(assets: Iterable[ParsedAssetRecord]) -> List[LocationGroup]:
    """
    Group parsed assets by location id, then by product name.

    Parameters
    ----------
    assets : Iterable[ParsedAssetRecord]
        Parsed assets in export order

    Returns
    -------
    List[LocationGroup]
        Locations sorted by latest contract end, each with its product
        groups sorted the same way
    """
    # location_id -> product_name -> assets, in first-seen order
    by_location: Dict[str, Dict[str, List[ParsedAssetRecord]]] = {}
    representatives: Dict[str, ParsedAssetRecord] = {}

    for asset in assets:
        if asset.location_id not in by_location:
            by_location[asset.location_id] = {}
            representatives[asset.location_id] = asset
        by_location[asset.location_id].setdefault(asset.product_name, []).append(asset)

    location_groups: List[LocationGroup] = []
    for location_id, products in by_location.items():
        product_groups = sorted(
            (_build_product_group(name, items) for name, items in products.items()),
            key=lambda g: g.group_end,
        )
        representative = representatives[location_id]
        location_groups.append(
            LocationGroup(
                location_id=location_id,
                location_name=representative.location_name,
                city=representative.city,
                country=representative.country,
                product_groups=product_groups,
                location_start=min(g.group_start for g in product_groups),
                location_end=max(g.group_end for g in product_groups),
            )
        )
        logger.debug(
            f"Location {location_id}: {len(product_groups)} product groups, "
            f"{sum(len(g.assets) for g in product_groups)} assets"
        )

    location_groups.sort(key=lambda g: g.location_end)
    return location_groups


def filter_location_groups(
    location_groups: List[LocationGroup], location_ids: Iterable[str]
) -> List[LocationGroup]:
    """Keep only the selected locations; an empty selection keeps all."""
    selected = set(location_ids)
    if not selected:
        return list(location_groups)
    return [g for g in location_groups if g.location_id in selected]
