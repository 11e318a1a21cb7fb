"""Temporary product cleanup for order webhooks and the admin sweep.

Temporary products are recognised only by the reserved SKU prefix on their
variants. Nothing records which products this service created, so any
catalog product whose SKU happens to share the prefix is also deleted.
"""

import json
from typing import Iterable, List, Union

from infrastructure.config.settings import Settings
from shared import (
    CleanupReport,
    DeletionFailure,
    LoggerMixin,
    ProcessingError,
    RelayException,
    dedupe,
)
from .client import ShopifyClient
from .types import OrderLineItem, OrderWebhook


class TemporaryProductCleaner(LoggerMixin):
    """Finds and deletes temporary products."""

    def __init__(self, client: ShopifyClient, settings: Settings):
        self.client = client
        self.prefix = settings.temp_sku_prefix
        self.page_size = settings.cleanup_page_size

    @staticmethod
    def parse_order(body: Union[bytes, str]) -> OrderWebhook:
        """Parse a raw orders/create body."""
        try:
            data = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise ProcessingError("body is not valid JSON") from e

        if not isinstance(data, dict):
            raise ProcessingError("body is not a JSON object")

        try:
            return OrderWebhook(**data)
        except ValueError as e:
            raise ProcessingError("unexpected order payload", details={"error": str(e)}) from e

    async def resolve_product_ids(self, line_items: Iterable[OrderLineItem]) -> List[int]:
        """Map temporary line items to their unique parent product ids."""
        product_ids = []
        for item in line_items:
            if not item.is_temporary(self.prefix) or not item.variant_id:
                continue
            try:
                variant = await self.client.get_variant(item.variant_id)
            except RelayException as e:
                self.log_error(e, "variant_lookup_failed", variant_id=item.variant_id)
                continue

            if variant and variant.product_id:
                product_ids.append(variant.product_id)
            else:
                self.log_event(
                    "variant_without_product",
                    level="warning",
                    variant_id=item.variant_id
                )
        return dedupe(product_ids)

    async def delete_products(self, product_ids: Iterable[int]) -> CleanupReport:
        """Delete each product independently; failures never stop the batch."""
        report = CleanupReport()
        for product_id in product_ids:
            try:
                await self.client.delete_product(product_id)
            except RelayException as e:
                self.log_error(e, "temporary_product_delete_failed", product_id=product_id)
                report.failed.append(DeletionFailure(product_id=product_id, error=str(e)))
                continue
            self.log_event("temporary_product_deleted", product_id=product_id)
            report.deleted.append(product_id)
        return report

    async def process_order(self, order: OrderWebhook) -> CleanupReport:
        """Delete the temporary products referenced by an order."""
        product_ids = await self.resolve_product_ids(order.line_items)
        report = await self.delete_products(product_ids)
        self.log_event(
            "order_cleanup_finished",
            order_id=order.id,
            deleted=report.deleted,
            failed=len(report.failed)
        )
        return report

    async def sweep(self) -> CleanupReport:
        """Delete every unpublished product carrying the reserved prefix."""
        products = await self.client.list_unpublished_products(limit=self.page_size)
        candidates = [p.id for p in products if p.is_temporary(self.prefix)]
        self.log_event(
            "sweep_candidates_found",
            scanned=len(products),
            candidates=len(candidates)
        )
        return await self.delete_products(candidates)
