from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class Product(BaseModel):
    """Sample record sent through the queue.

    Both fields may be missing from a received body; they are then None.
    """

    ProductID: Optional[str] = None
    ProductName: Optional[str] = None

    model_config = {
        "extra": "ignore",
    }


SAMPLE_PRODUCTS = (
    Product(ProductID="P01", ProductName="Talcum Powder"),
    Product(ProductID="P02", ProductName="Body Perfume"),
)
