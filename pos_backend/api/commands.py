"""
Command surface

One ``POST /commands/<name>`` endpoint per client command. Bodies carry the
command arguments as camelCase JSON; results go back as plain JSON values.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request

from pos_backend.api.schemas import (
    CategoryIdArgs,
    CategorySchema,
    CustomerSchema,
    IdArgs,
    IdsArgs,
    MergeCustomersArgs,
    OrderSchema,
    ProductSchema,
    QueryArgs,
    SaveCategoriesArgs,
    SaveCategoryArgs,
    SaveCustomerArgs,
    SaveOrderArgs,
    SaveProductArgs,
    SaveSettingsArgs,
    SettingsSchema,
    UpdateProductPriceArgs,
)
from pos_backend.infrastructure.container.dependency_injection import (
    DependencyContainer,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/commands", tags=["commands"])


def get_container(request: Request) -> DependencyContainer:
    """Container created at startup and kept on the application state"""
    return request.app.state.container


# Orders


@router.post("/save_order")
async def save_order(
    args: SaveOrderArgs, container: DependencyContainer = Depends(get_container)
) -> str:
    order = args.order.to_entity()
    logger.info("📨 COMMAND save_order: %s", order.id)
    return await container.get_order_ingestion_use_case().submit(order)


@router.post("/get_all_orders")
async def get_all_orders(
    container: DependencyContainer = Depends(get_container),
) -> List[Dict[str, Any]]:
    orders = await container.get_order_history_use_case().list_orders()
    return [OrderSchema.from_entity(order).to_wire() for order in orders]


# Customers


@router.post("/save_customer")
async def save_customer(
    args: SaveCustomerArgs, container: DependencyContainer = Depends(get_container)
) -> None:
    await container.get_customer_management_use_case().save_customer(
        args.customer.to_entity()
    )


@router.post("/merge_customers")
async def merge_customers(
    args: MergeCustomersArgs, container: DependencyContainer = Depends(get_container)
) -> None:
    logger.info("📨 COMMAND merge_customers: %s -> %s", args.source_id, args.target_id)
    await container.get_customer_management_use_case().merge_customers(
        args.source_id, args.target_id
    )


@router.post("/delete_customer")
async def delete_customer(
    args: IdArgs, container: DependencyContainer = Depends(get_container)
) -> None:
    logger.info("📨 COMMAND delete_customer: %s", args.id)
    await container.get_customer_management_use_case().delete_customer(args.id)


@router.post("/batch_delete_customers")
async def batch_delete_customers(
    args: IdsArgs, container: DependencyContainer = Depends(get_container)
) -> None:
    logger.info("📨 COMMAND batch_delete_customers: %d ids", len(args.ids))
    await container.get_customer_management_use_case().batch_delete_customers(args.ids)


@router.post("/get_all_customers")
async def get_all_customers(
    container: DependencyContainer = Depends(get_container),
) -> List[Dict[str, Any]]:
    customers = await container.get_customer_management_use_case().get_all_customers()
    return [CustomerSchema.from_entity(customer).to_wire() for customer in customers]


@router.post("/get_customer_by_id")
async def get_customer_by_id(
    args: IdArgs, container: DependencyContainer = Depends(get_container)
) -> Dict[str, Any]:
    customer = await container.get_customer_management_use_case().get_customer_by_id(
        args.id
    )
    return CustomerSchema.from_entity(customer).to_wire()


@router.post("/search_customers")
async def search_customers(
    args: QueryArgs, container: DependencyContainer = Depends(get_container)
) -> List[Dict[str, Any]]:
    customers = await container.get_customer_management_use_case().search_customers(
        args.query
    )
    return [CustomerSchema.from_entity(customer).to_wire() for customer in customers]


# Products


@router.post("/get_all_products")
async def get_all_products(
    container: DependencyContainer = Depends(get_container),
) -> List[Dict[str, Any]]:
    products = await container.get_product_catalog_use_case().get_all_products()
    return [ProductSchema.from_entity(product).to_wire() for product in products]


@router.post("/get_product_by_id")
async def get_product_by_id(
    args: IdArgs, container: DependencyContainer = Depends(get_container)
) -> Dict[str, Any]:
    product = await container.get_product_catalog_use_case().get_product_by_id(args.id)
    return ProductSchema.from_entity(product).to_wire()


@router.post("/search_products")
async def search_products(
    args: QueryArgs, container: DependencyContainer = Depends(get_container)
) -> List[Dict[str, Any]]:
    products = await container.get_product_catalog_use_case().search_products(args.query)
    return [ProductSchema.from_entity(product).to_wire() for product in products]


@router.post("/get_products_by_category")
async def get_products_by_category(
    args: CategoryIdArgs, container: DependencyContainer = Depends(get_container)
) -> List[Dict[str, Any]]:
    products = await container.get_product_catalog_use_case().get_products_by_category(
        args.category_id
    )
    return [ProductSchema.from_entity(product).to_wire() for product in products]


@router.post("/save_product")
async def save_product(
    args: SaveProductArgs, container: DependencyContainer = Depends(get_container)
) -> Dict[str, Any]:
    saved = await container.get_product_catalog_use_case().save_product(
        args.product.to_entity()
    )
    return ProductSchema.from_entity(saved).to_wire()


@router.post("/delete_product")
async def delete_product(
    args: IdArgs, container: DependencyContainer = Depends(get_container)
) -> None:
    await container.get_product_catalog_use_case().delete_product(args.id)


@router.post("/batch_delete_products")
async def batch_delete_products(
    args: IdsArgs, container: DependencyContainer = Depends(get_container)
) -> None:
    await container.get_product_catalog_use_case().batch_delete_products(args.ids)


@router.post("/update_product_price")
async def update_product_price(
    args: UpdateProductPriceArgs, container: DependencyContainer = Depends(get_container)
) -> Dict[str, Any]:
    product = await container.get_product_catalog_use_case().update_product_price(
        args.id, args.price
    )
    return ProductSchema.from_entity(product).to_wire()


# Categories


@router.post("/get_all_categories")
async def get_all_categories(
    container: DependencyContainer = Depends(get_container),
) -> List[Dict[str, Any]]:
    categories = await container.get_product_catalog_use_case().get_all_categories()
    return [CategorySchema.from_entity(category).to_wire() for category in categories]


@router.post("/get_category_tree")
async def get_category_tree(
    container: DependencyContainer = Depends(get_container),
) -> List[Dict[str, Any]]:
    categories = await container.get_product_catalog_use_case().get_category_tree()
    return [CategorySchema.from_entity(category).to_wire() for category in categories]


@router.post("/get_category_by_id")
async def get_category_by_id(
    args: IdArgs, container: DependencyContainer = Depends(get_container)
) -> Dict[str, Any]:
    category = await container.get_product_catalog_use_case().get_category_by_id(
        args.id
    )
    return CategorySchema.from_entity(category).to_wire()


@router.post("/save_category")
async def save_category(
    args: SaveCategoryArgs, container: DependencyContainer = Depends(get_container)
) -> Dict[str, Any]:
    saved = await container.get_product_catalog_use_case().save_category(
        args.category.to_entity()
    )
    return CategorySchema.from_entity(saved).to_wire()


@router.post("/save_categories_batch")
async def save_categories_batch(
    args: SaveCategoriesArgs, container: DependencyContainer = Depends(get_container)
) -> None:
    await container.get_product_catalog_use_case().save_categories_batch(
        [category.to_entity() for category in args.categories]
    )


@router.post("/delete_category")
async def delete_category(
    args: IdArgs, container: DependencyContainer = Depends(get_container)
) -> None:
    await container.get_product_catalog_use_case().delete_category(args.id)


# Settings


@router.post("/get_settings")
async def get_settings(
    container: DependencyContainer = Depends(get_container),
) -> Optional[Dict[str, Any]]:
    settings = await container.get_settings_use_case().get_settings()
    if settings is None:
        return None
    return SettingsSchema.from_entity(settings).to_wire()


@router.post("/save_settings")
async def save_settings(
    args: SaveSettingsArgs, container: DependencyContainer = Depends(get_container)
) -> None:
    await container.get_settings_use_case().save_settings(args.settings.to_entity())
