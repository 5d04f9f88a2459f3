from app.application.interfaces.catalog import CatalogLookup
from app.application.interfaces.line_item_repo import LineItemRepo
from app.application.line_items.base import LineItemHandler
from app.application.line_items.flight import FlightItemHandler
from app.application.line_items.hotel import HotelItemHandler
from app.application.line_items.package import PackageItemHandler
from app.application.line_items.service import ServiceItemHandler
from app.domain.entities.line_item import LineItemKind


def build_line_item_handlers(
    catalog: CatalogLookup,
    line_item_repo: LineItemRepo,
) -> dict[LineItemKind, LineItemHandler]:
    handlers = (
        HotelItemHandler(catalog, line_item_repo),
        FlightItemHandler(catalog, line_item_repo),
        PackageItemHandler(catalog, line_item_repo),
        ServiceItemHandler(catalog, line_item_repo),
    )
    return {handler.kind: handler for handler in handlers}
