from typing import Dict, Iterable, Mapping

from sqlalchemy.orm import Session

from app.errors import NotFoundError, ValidationError
from app.repositories.product_repo import ProductRepository
from app.services.cart_service import check_quantity
from app.services.pricing import calculate_totals, line_total, to_money


class CheckoutService:
    """Guest checkout pricing: no cart rows, lines come straight from the client."""

    def __init__(self, db: Session):
        self.db = db
        self.product_repo = ProductRepository(db)

    def quote(self, lines: Iterable[Mapping]) -> Dict:
        """
        lines: [{"product_id": str, "quantity": int}, ...]
        Prices every line at the live catalog price; client prices are never read.
        """
        lines = list(lines)
        if not lines:
            raise ValidationError("No items to price")
        products = {p.id: p for p in self.product_repo.get_many(l["product_id"] for l in lines)}

        priced = []
        for l in lines:
            product = products.get(l["product_id"])
            if not product:
                raise NotFoundError(f"Product not found: {l['product_id']}")
            qty = check_quantity(l["quantity"])
            price = to_money(product.price)
            priced.append(
                {
                    "product_id": product.id,
                    "quantity": qty,
                    "unit_price": price,
                    "line_total": line_total(price, qty),
                }
            )
        totals = calculate_totals((p["unit_price"], p["quantity"]) for p in priced)
        return {"items": priced, **totals._asdict()}
