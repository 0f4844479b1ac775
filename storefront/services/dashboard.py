# storefront/services/dashboard.py
from datetime import date, datetime, time

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.models.order import Order, OrderItem
from storefront.models.product import Product
from storefront.models.users import User, UserRole
from storefront.schemas.stats import DashboardMetrics, TopSellingProduct


def get_dashboard_metrics(db: Session) -> DashboardMetrics:
    # Calculate total historical sales
    total_sales = db.query(func.sum(Order.total_amount)).scalar() or 0.0

    total_orders = db.query(Order).count()

    # Orders placed since local midnight
    midnight = datetime.combine(date.today(), time.min)
    new_orders_today = db.query(Order).filter(Order.created_at >= midnight).count()

    total_customers = db.query(User).filter(User.role == UserRole.CUSTOMER).count()

    low_stock_products = db.query(Product).filter(
        Product.stock_quantity <= settings.LOW_STOCK_THRESHOLD
    ).count()

    # Aggregate sold quantity by product, sort descending
    total_sold = func.sum(OrderItem.quantity).label("total_sold")
    top_rows = (
        db.query(
            OrderItem.product_id.label("product_id"),
            Product.name.label("product_name"),
            total_sold,
        )
        .join(Product, OrderItem.product_id == Product.id)
        .group_by(OrderItem.product_id, Product.name)
        .order_by(total_sold.desc(), OrderItem.product_id)
        .limit(settings.TOP_SELLING_LIMIT)
        .all()
    )

    return DashboardMetrics(
        total_sales=round(float(total_sales), 2),
        total_orders=total_orders,
        new_orders_today=new_orders_today,
        total_customers=total_customers,
        low_stock_products=low_stock_products,
        top_selling_products=[
            TopSellingProduct(
                product_id=row.product_id,
                product_name=row.product_name,
                total_sold=int(row.total_sold or 0),
            )
            for row in top_rows
        ],
    )
