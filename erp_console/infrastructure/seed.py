"""
Demo data written to storage the first time a collection record is missing.

Records use the persisted (camelCase) layout. Order and transaction dates are
relative to the moment the data is built.
"""

from datetime import datetime, timedelta
from typing import Any, Optional

from erp_console.application.services.auth_service import hash_password
from erp_console.core.clock import now as clock_now

Rows = list[dict[str, Any]]


def _stamp(moment: datetime) -> dict[str, str]:
    return {"createdAt": moment.isoformat(), "updatedAt": moment.isoformat()}


def _address(street, number, complement, neighborhood, city, state, zip_code) -> dict[str, str]:
    return {
        "street": street,
        "number": number,
        "complement": complement,
        "neighborhood": neighborhood,
        "city": city,
        "state": state,
        "zipCode": zip_code,
        "country": "USA",
    }


def categories(moment: datetime) -> Rows:
    return [
        {"id": "cat_1", "name": "Electronics", "description": "Electronic devices and accessories", **_stamp(moment)},
        {"id": "cat_2", "name": "Furniture", "description": "Home and office furniture", **_stamp(moment)},
        {"id": "cat_3", "name": "Clothing", "description": "Apparel and fashion items", **_stamp(moment)},
    ]


def products(moment: datetime) -> Rows:
    rows = [
        ("prod_1", "Monitor", "Monitor para computador", "LPT-001", 1299.99, 800, 25, "cat_1", "sup_1",
         "https://images.pexels.com/photos/18104/pexels-photo.jpg"),
        ("prod_2", "Cadeira", "Cadeira de escritório", "OFC-001", 249.99, 150, 15, "cat_2", "sup_2",
         "https://images.pexels.com/photos/1957478/pexels-photo-1957478.jpeg"),
        ("prod_3", "Camiseta", "Camiseta polo", "TSH-001", 19.99, 5, 100, "cat_3", "sup_3",
         "https://images.pexels.com/photos/1656684/pexels-photo-1656684.jpeg"),
    ]
    return [
        {
            "id": id,
            "name": name,
            "description": description,
            "sku": sku,
            "price": price,
            "cost": cost,
            "stockQuantity": stock,
            "categoryId": category_id,
            "supplierId": supplier_id,
            "imageUrl": image_url,
            "isActive": True,
            **_stamp(moment),
        }
        for id, name, description, sku, price, cost, stock, category_id, supplier_id, image_url in rows
    ]


def clients(moment: datetime) -> Rows:
    return [
        {
            "id": "client_1",
            "name": "John Doe",
            "email": "john@example.com",
            "phone": "555-123-4567",
            "document": "123.456.789-00",
            "documentType": "cpf",
            "address": _address("Main Street", "123", "Apt 4B", "Downtown", "Metropolis", "CA", "90210"),
            "isActive": True,
            **_stamp(moment),
        },
        {
            "id": "client_2",
            "name": "ABC Corp",
            "email": "contact@abccorp.com",
            "phone": "555-987-6543",
            "document": "12.345.678/0001-90",
            "documentType": "cnpj",
            "address": _address(
                "Business Avenue", "500", "10th Floor", "Financial District", "Metropolis", "CA", "90220"
            ),
            "isActive": True,
            **_stamp(moment),
        },
    ]


def suppliers(moment: datetime) -> Rows:
    rows = [
        ("sup_1", "Tech Distributors Inc.", "Sarah Johnson", "Eletrônicos", "sjohnson@techdist.com",
         "555-789-1234", "12.345.678/0001-90",
         _address("Tech Avenue", "1000", "Suite 200", "Innovation District", "San Francisco", "CA", "94103")),
        ("sup_2", "Office Solutions Ltd.", "Michael Chen", "Móveis para escritório", "mchen@officesolutions.com",
         "555-456-7890", "98.765.432/0001-10",
         _address("Commerce Street", "500", "Floor 5", "Business Park", "Chicago", "IL", "60601")),
        ("sup_3", "Fashion Wholesale Co.", "Emma Rodriguez", "Roupas", "erodriguez@fashionwholesale.com",
         "555-321-6547", "87.654.321/0001-01",
         _address("Fashion Avenue", "300", "Building B", "Garment District", "New York", "NY", "10018")),
    ]
    return [
        {
            "id": id,
            "name": name,
            "contactName": contact_name,
            "product": product,
            "email": email,
            "phone": phone,
            "document": document,
            "address": address,
            "isActive": True,
            **_stamp(moment),
        }
        for id, name, contact_name, product, email, phone, document, address in rows
    ]


def orders(moment: datetime) -> Rows:
    week_ago = moment - timedelta(days=7)
    three_days_ago = moment - timedelta(days=3)
    return [
        {
            "id": "order_1",
            "clientId": "client_1",
            "userId": "user_1",
            "orderNumber": "ORD-001",
            "status": "completed",
            "paymentStatus": "paid",
            "paymentMethod": "credit",
            "items": [
                {"id": "item_1", "productId": "prod_1", "quantity": 1, "unitPrice": 1299.99, "discount": 0,
                 "total": 1299.99},
            ],
            "discount": 0,
            "tax": 130,
            "shipping": 0,
            "total": 1429.99,
            "notes": "Standard delivery",
            **_stamp(week_ago),
        },
        {
            "id": "order_2",
            "clientId": "client_2",
            "userId": "user_1",
            "orderNumber": "ORD-002",
            "status": "completed",
            "paymentStatus": "paid",
            "paymentMethod": "credit",
            "items": [
                {"id": "item_2", "productId": "prod_2", "quantity": 5, "unitPrice": 249.99, "discount": 0,
                 "total": 1249.95},
            ],
            "discount": 125,
            "tax": 112.5,
            "shipping": 0,
            "total": 1237.45,
            "notes": "Corporate discount applied",
            **_stamp(three_days_ago),
        },
    ]


def transactions(moment: datetime) -> Rows:
    rows = [
        ("trans_1", "income", 1429.99, "Payment for order ORD-001", 7, "sale", "order_1", None),
        ("trans_2", "income", 1237.45, "Payment for order ORD-002", 3, "sale", "order_2", None),
        ("trans_3", "expense", 2500, "Supplier payment", 5, "purchase", None, "sup_1"),
        ("trans_4", "expense", 1200, "Monthly rent", 2, "rent", None, None),
    ]
    result = []
    for id, type, amount, description, days_ago, category, order_id, supplier_id in rows:
        when = moment - timedelta(days=days_ago)
        result.append({
            "id": id,
            "type": type,
            "amount": amount,
            "description": description,
            "date": when.isoformat(),
            "category": category,
            "orderId": order_id,
            "supplierId": supplier_id,
            "userId": "user_1",
            **_stamp(when),
        })
    return result


def users(moment: datetime) -> Rows:
    return [
        {
            "id": "user_1",
            "name": "Admin User",
            "email": "admin@example.com",
            "passwordHash": hash_password("admin123"),
            "role": "admin",
            "isActive": True,
            **_stamp(moment),
        },
        {
            "id": "user_2",
            "name": "Regular User",
            "email": "user@example.com",
            "passwordHash": hash_password("user123"),
            "role": "user",
            "isActive": True,
            **_stamp(moment),
        },
    ]


def demo_data(moment: Optional[datetime] = None) -> dict[str, Rows]:
    """Initial rows for every collection, keyed by storage key."""
    moment = moment or clock_now()
    return {
        "categories": categories(moment),
        "products": products(moment),
        "clients": clients(moment),
        "suppliers": suppliers(moment),
        "orders": orders(moment),
        "transactions": transactions(moment),
        "users": users(moment),
    }
