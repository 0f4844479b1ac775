from pydantic import BaseModel
from typing import List


# Schema for top selling products
class TopSellingProduct(BaseModel):
    product_id: int
    product_name: str
    total_sold: int

    class Config:
        from_attributes = True


class DashboardMetrics(BaseModel):
    total_sales: float
    total_orders: int
    new_orders_today: int
    total_customers: int
    low_stock_products: int
    top_selling_products: List[TopSellingProduct]
