"""
Wire schemas for the command surface

The client speaks camelCase JSON; snake_case keys are accepted on input too.
Every schema converts to and from its domain entity.
"""

from dataclasses import asdict
from datetime import date as date_type, datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from pos_backend.domain.entities.customer_entity import Customer
from pos_backend.domain.entities.order_entity import Order, OrderItem
from pos_backend.domain.entities.product_entity import Category, Product
from pos_backend.domain.entities.settings_entity import AppSettings
from pos_backend.domain.value_objects.customer_id import CustomerId
from pos_backend.infrastructure.utilities.constants import (
    SETTINGS_ROW_ID,
    OrderNumberDefaults,
    OrderStatus,
)


class WireModel(BaseModel):
    """Base for all wire schemas"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class CustomerSchema(WireModel):
    id: str
    name: Optional[str] = ""
    phone: Optional[str] = ""
    license_plate: Optional[str] = ""
    address: Optional[str] = None
    last_purchase_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_entity(self) -> Customer:
        return Customer(
            id=CustomerId.parse(self.id),
            name=self.name or "",
            phone=self.phone or "",
            license_plate=self.license_plate or "",
            address=self.address,
            last_purchase_at=self.last_purchase_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, customer: Customer) -> "CustomerSchema":
        return cls(
            id=customer.id.value,
            name=customer.name,
            phone=customer.phone,
            license_plate=customer.license_plate,
            address=customer.address,
            last_purchase_at=customer.last_purchase_at,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )


class OrderItemSchema(WireModel):
    # Older clients send the product reference as ``id``
    product_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("productId", "product_id", "id"),
        serialization_alias="productId",
    )
    name: str
    unit: str = ""
    price: float
    quantity: float
    discount_price: Optional[float] = None
    remark: Optional[str] = None
    sort_value: int = 0

    def to_entity(self) -> OrderItem:
        return OrderItem(
            product_id=self.product_id,
            name=self.name,
            unit=self.unit,
            price=self.price,
            quantity=self.quantity,
            discount_price=self.discount_price,
            remark=self.remark,
            sort_value=self.sort_value,
        )

    @classmethod
    def from_entity(cls, item: OrderItem) -> "OrderItemSchema":
        return cls(
            product_id=item.product_id,
            name=item.name,
            unit=item.unit,
            price=item.price,
            quantity=item.quantity,
            discount_price=item.discount_price,
            remark=item.remark,
            sort_value=item.sort_value,
        )


class OrderSchema(WireModel):
    id: str
    order_number: Optional[str] = ""
    date: date_type
    customer_id: Optional[str] = None
    customer: CustomerSchema
    items: List[OrderItemSchema] = Field(default_factory=list)
    total_amount: float = 0.0
    remark: Optional[str] = None
    template_id: Optional[str] = None
    status: str = OrderStatus.COMPLETED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_customer_id(self) -> "OrderSchema":
        """``customerId`` is optional but may not contradict ``customer.id``"""
        if self.customer_id and self.customer_id != self.customer.id:
            raise ValueError(
                f"customerId {self.customer_id!r} does not match customer.id {self.customer.id!r}"
            )
        return self

    def to_entity(self) -> Order:
        """The embedded customer's id decides who the order belongs to"""
        customer = self.customer.to_entity()
        return Order(
            id=self.id,
            order_number=self.order_number or "",
            date=self.date,
            customer_id=customer.id,
            customer=customer,
            items=[item.to_entity() for item in self.items],
            total_amount=self.total_amount,
            remark=self.remark,
            template_id=self.template_id,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, order: Order) -> "OrderSchema":
        return cls(
            id=order.id,
            order_number=order.order_number,
            date=order.date,
            customer_id=order.customer_id.value,
            customer=CustomerSchema.from_entity(order.customer),
            items=[OrderItemSchema.from_entity(item) for item in order.items],
            total_amount=order.total_amount,
            remark=order.remark,
            template_id=order.template_id,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class ProductSchema(WireModel):
    id: str
    name: str
    unit: str = ""
    price: float
    category_id: Optional[str] = None
    stock: Optional[float] = None
    min_stock: Optional[float] = None
    track_stock: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_entity(self) -> Product:
        return Product(**self.model_dump())

    @classmethod
    def from_entity(cls, product: Product) -> "ProductSchema":
        return cls(
            id=product.id,
            name=product.name,
            unit=product.unit,
            price=product.price,
            category_id=product.category_id,
            stock=product.stock,
            min_stock=product.min_stock,
            track_stock=product.track_stock,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class CategorySchema(WireModel):
    id: str
    name: str
    parent_id: Optional[str] = None
    level: int = 0
    path: str = ""
    sort_order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_entity(self) -> Category:
        return Category(**self.model_dump())

    @classmethod
    def from_entity(cls, category: Category) -> "CategorySchema":
        return cls(
            id=category.id,
            name=category.name,
            parent_id=category.parent_id,
            level=category.level,
            path=category.path,
            sort_order=category.sort_order,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class SettingsSchema(WireModel):
    id: str = SETTINGS_ROW_ID
    order_number_format: str = OrderNumberDefaults.FORMAT
    order_number_prefix: str = OrderNumberDefaults.PREFIX
    order_number_digits: int = OrderNumberDefaults.DIGITS
    order_number_reset_daily: bool = OrderNumberDefaults.RESET_DAILY
    theme: str = "light"
    font_size: int = 14
    date_format: str = "YYYY-MM-DD"
    default_template_id: str = ""
    default_category_id: str = ""
    auto_backup: bool = True
    backup_interval: int = 24
    backup_keep_count: int = 10
    retain_days: int = 90
    updated_at: Optional[datetime] = None

    def to_entity(self) -> AppSettings:
        return AppSettings(**self.model_dump())

    @classmethod
    def from_entity(cls, settings: AppSettings) -> "SettingsSchema":
        return cls(**asdict(settings))


# Command arguments


class SaveOrderArgs(WireModel):
    order: OrderSchema


class SaveCustomerArgs(WireModel):
    customer: CustomerSchema


class MergeCustomersArgs(WireModel):
    source_id: str
    target_id: str


class IdArgs(WireModel):
    id: str


class IdsArgs(WireModel):
    ids: List[str]


class QueryArgs(WireModel):
    query: str = ""


class CategoryIdArgs(WireModel):
    category_id: str


class SaveProductArgs(WireModel):
    product: ProductSchema


class UpdateProductPriceArgs(WireModel):
    id: str
    price: float


class SaveCategoryArgs(WireModel):
    category: CategorySchema


class SaveCategoriesArgs(WireModel):
    categories: List[CategorySchema]


class SaveSettingsArgs(WireModel):
    settings: SettingsSchema
