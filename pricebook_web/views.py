"""
NiceGUI views for Pricebook.

One page, several named views switched in memory by the Navigator.
"""

import logging
from typing import Optional

from nicegui import app, ui

from pricebook_web.admin import (
    CATEGORY_NOT_EMPTY_MESSAGE,
    CategoryAdmin,
    CategoryNotEmptyError,
    ProductAdmin,
)
from pricebook_web.api_client import CatalogClient, StoreError
from pricebook_web.browsing import BrowseState, CategoryBrowser
from pricebook_web.catalog import CatalogListing
from pricebook_web.config import settings
from pricebook_web.forms import FormError, parse_category_form, parse_product_form
from pricebook_web.icons import CategoryIcon
from pricebook_web.images import ImageError, image_to_data_url
from pricebook_web.models import Category, Product
from pricebook_web.navigation import Navigator, View
from pricebook_web.pricing import format_amount, format_price
from pricebook_web.session import AdminSession
from pricebook_web.sku_search import MessageKind, SkuSearch

logger = logging.getLogger(__name__)


# --- Styles ---

def setup_styles():
    """Page-wide CSS."""
    ui.add_head_html("""
    <style>
        .container { max-width: 1200px; margin: 0 auto; padding: 24px; width: 100%; }
        .muted { color: #64748b; }
        .price { color: #d97706; font-weight: 700; }
        .sku { font-family: monospace; font-size: 0.8em; color: #475569; }
        .notice { background: #fffbeb; border: 1px solid #fde68a; color: #78350f;
                  padding: 10px; border-radius: 8px; }
        .product-image { width: 100%; height: 180px; object-fit: contain; background: #f8fafc; }
    </style>
    """)


class CatalogApp:
    """Per-browser-tab state and rendering."""

    def __init__(self, client: CatalogClient, storage):
        self.client = client
        self.session = AdminSession(storage)
        self.navigator = Navigator(is_admin=self.session.load)
        self.listing = CatalogListing(client)
        self.browser = CategoryBrowser(client)
        self.sku = SkuSearch(client, on_change=lambda _state: self.sku_panel.refresh())
        self.category_admin = CategoryAdmin(client)
        self.product_admin = ProductAdmin(client)
        self.product_rows = []
        self.admin_loading = False

    # --- Navigation ---

    async def go(self, target) -> None:
        view = self.navigator.navigate(target)
        self.header.refresh()
        await self.load_view(view)

    async def open_category(self, category_id: str) -> None:
        self.sku.clear()
        self.navigator.open_category(category_id)
        self.header.refresh()
        await self.load_view(View.CATEGORY)

    async def logout(self) -> None:
        self.session.logout()
        self.navigator.logged_out()
        self.header.refresh()
        await self.load_view(View.HOME)

    async def load_view(self, view: View) -> None:
        if view == View.HOME:
            self.listing.loading = True
            self.content.refresh()
            await self.listing.load()
        elif view == View.CATEGORY:
            self.browser.state = BrowseState.LOADING
            self.content.refresh()
            await self.browser.load_category(self.navigator.selected_category_id)
        elif view == View.MANAGE_CATEGORIES:
            self.admin_loading = True
            self.content.refresh()
            await self.category_admin.list()
            self.admin_loading = False
        elif view == View.MANAGE_PRODUCTS:
            self.admin_loading = True
            self.content.refresh()
            try:
                self.product_rows = await self.product_admin.list()
            except StoreError as e:
                logger.error(f"Error loading products: {e}")
                self.product_rows = []
                ui.notify(f"Error loading products: {e.message}", type="negative")
            self.admin_loading = False
        self.content.refresh()

    # --- Layout ---

    def build(self) -> None:
        setup_styles()
        with ui.header().classes("bg-slate-900 items-center justify-between"):
            self.header()
        with ui.column().classes("container"):
            self.content()

    @ui.refreshable
    def header(self) -> None:
        current = self.navigator.current
        ui.button(settings.TITLE, icon="sell", on_click=lambda: self.go(View.HOME)).props(
            "flat color=white no-caps"
        ).classes("text-lg font-bold")
        with ui.row().classes("gap-1"):
            if self.session.load():
                for view, label in (
                    (View.HOME, "Categories"),
                    (View.MANAGE_PRODUCTS, "Manage Products"),
                    (View.MANAGE_CATEGORIES, "Manage Categories"),
                ):
                    button = ui.button(label, on_click=lambda v=view: self.go(v)).props(
                        "flat color=white no-caps"
                    )
                    if current == view:
                        button.classes("bg-slate-700")
                ui.button("Sign Out", icon="logout", on_click=self.logout).props(
                    "flat color=white no-caps"
                )
            else:
                ui.button("Admin Login", icon="lock", on_click=lambda: self.go(View.ADMIN_LOGIN)).props(
                    "flat color=white no-caps"
                )

    @ui.refreshable
    def content(self) -> None:
        view = self.navigator.current
        if view == View.HOME:
            self.render_home()
        elif view == View.CATEGORY:
            self.render_category()
        elif view == View.ADMIN_LOGIN:
            self.render_login()
        elif view == View.MANAGE_CATEGORIES:
            self.render_manage_categories()
        elif view == View.MANAGE_PRODUCTS:
            self.render_manage_products()

    # --- Home ---

    def render_home(self) -> None:
        ui.label("Product Categories").classes("text-3xl font-bold")
        ui.label("Select a category to view products and prices").classes("muted")

        with ui.card().classes("w-full"):
            ui.label("Quick SKU Search").classes("text-lg font-semibold")
            ui.label("Enter a SKU to instantly view the product price.").classes("muted text-sm")
            ui.input(
                placeholder="e.g., ROLEX-001",
                value=self.sku.state.query,
                on_change=lambda e: self.sku.on_input(e.value or ""),
            ).classes("w-full").props("clearable input-class=font-mono")
            self.sku_panel()

        if self.listing.loading:
            with ui.row().classes("w-full justify-center"):
                ui.spinner(size="lg")
                ui.label("Loading categories...").classes("muted")
            return

        if self.listing.error:
            ui.label(f"Error loading categories: {self.listing.error}").style("color: red;")

        if not self.listing.categories:
            ui.label("No categories available yet.").classes("muted w-full text-center")
            return

        with ui.grid(columns=3).classes("w-full gap-4"):
            for summary in self.listing.summaries:
                category = summary.category
                with ui.card().classes("cursor-pointer hover:shadow-md").on(
                    "click", lambda _e, cid=category.id: self.open_category(cid)
                ):
                    with ui.row().classes("items-center gap-4 no-wrap"):
                        ui.icon(summary.icon.glyph, size="md").classes("text-slate-700")
                        with ui.column().classes("gap-0"):
                            ui.label(category.name).classes("text-lg font-semibold")
                            ui.label(summary.count_label).classes("muted text-sm")

    @ui.refreshable
    def sku_panel(self) -> None:
        state = self.sku.state
        if state.searching:
            with ui.row().classes("items-center"):
                ui.spinner(size="sm")
                ui.label("Searching…").classes("muted text-sm")
        if state.message:
            color = "red" if state.message_kind == MessageKind.ERROR else "inherit"
            ui.label(state.message).classes("notice w-full").style(f"color: {color};")
        result = state.result
        if result is None:
            return
        with ui.card().classes("w-full bg-slate-50"):
            with ui.row().classes("w-full no-wrap gap-4"):
                ui.image(result.image_url).classes("w-36 h-28").props("fit=contain")
                with ui.column().classes("grow gap-1"):
                    ui.label(result.name).classes("font-semibold")
                    ui.label(f"SKU: {result.sku}").classes("sku")
                    if result.category_name:
                        ui.label(f"Category: {result.category_name}").classes("muted text-xs")
                    with ui.row():
                        ui.button(
                            "Open category",
                            on_click=lambda: self.open_category(result.category_id),
                        ).props("outline no-caps")
                        ui.button("Clear", on_click=self._clear_sku).props("outline no-caps")
                with ui.column().classes("items-end gap-0"):
                    ui.label("Price").classes("muted text-xs")
                    ui.label(format_price(result.price, result.price_max)).classes("price text-2xl")

    def _clear_sku(self) -> None:
        self.sku.clear()
        self.content.refresh()

    # --- Category ---

    def render_category(self) -> None:
        browser = self.browser
        ui.button("Back to Categories", icon="arrow_back", on_click=lambda: self.go(View.HOME)).props(
            "flat no-caps"
        )

        if browser.state != BrowseState.READY:
            with ui.row().classes("w-full justify-center"):
                ui.spinner(size="lg")
                ui.label("Loading products...").classes("muted")
            return

        name = browser.category.name if browser.category else "Unknown category"
        ui.label(name).classes("text-3xl font-bold")
        noun = "product" if browser.total == 1 else "products"
        ui.label(f"{browser.total} {noun} available").classes("muted")

        ui.input(
            placeholder="Filter this page by name or SKU",
            value=browser.query,
            on_change=self._on_filter,
        ).classes("w-full").props("clearable debounce=200")

        self.product_grid()

    @ui.refreshable
    def product_grid(self) -> None:
        browser = self.browser
        if browser.error:
            ui.label(f"Error loading products: {browser.error}").style("color: red;")

        products = browser.visible_products
        if not browser.products:
            with ui.card().classes("w-full items-center"):
                ui.icon("inventory_2", size="xl").classes("text-slate-300")
                ui.label("No products in this category yet.").classes("muted")
        elif not products:
            ui.label("No products match your search.").classes("muted w-full text-center")
        else:
            with ui.grid(columns=3).classes("w-full gap-4"):
                for product in products:
                    self._product_card(product)

        if browser.total_pages > 1:
            with ui.row().classes("w-full justify-center items-center"):
                ui.button("Previous", on_click=self._previous_page).props("outline no-caps").set_enabled(
                    browser.has_previous
                )
                ui.label(f"Page {browser.page} of {browser.total_pages}")
                ui.button("Next", on_click=self._next_page).props("outline no-caps").set_enabled(
                    browser.has_next
                )

    def _product_card(self, product: Product) -> None:
        with ui.card().tight():
            ui.image(product.image_url).classes("product-image").props("fit=contain")
            with ui.card_section():
                ui.label(product.name).classes("font-semibold text-sm")
                ui.label(product.sku).classes("sku")
                ui.label(format_price(product.price, product.price_max)).classes("price text-lg")

    async def _on_filter(self, e) -> None:
        await self.browser.set_query(e.value or "")
        self.product_grid.refresh()

    async def _next_page(self) -> None:
        if await self.browser.next_page():
            self.product_grid.refresh()

    async def _previous_page(self) -> None:
        if await self.browser.previous_page():
            self.product_grid.refresh()

    # --- Admin login ---

    def render_login(self) -> None:
        with ui.card().classes("w-96 self-center"):
            ui.label("Admin Login").classes("text-2xl font-bold")
            ui.label("Enter the admin password to manage the catalog.").classes("muted text-sm")
            password = ui.input("Password", password=True, password_toggle_button=True).classes("w-full")
            error = ui.label("").style("color: red;")

            async def submit():
                if self.session.login(password.value or ""):
                    view = self.navigator.login_succeeded()
                    self.header.refresh()
                    await self.load_view(view)
                else:
                    error.text = "Incorrect password"
                    password.value = ""

            password.on("keydown.enter", submit)
            ui.button("Sign In", on_click=submit).classes("w-full")

    # --- Manage categories ---

    def render_manage_categories(self) -> None:
        with ui.row().classes("w-full justify-between items-center"):
            with ui.column().classes("gap-0"):
                ui.label("Manage Categories").classes("text-3xl font-bold")
                ui.label("Add, edit, or remove product categories").classes("muted")
            ui.button("Add Category", icon="add", on_click=lambda: self._category_dialog(None))

        if self.admin_loading:
            ui.spinner(size="lg")
            return

        listing = self.category_admin.listing
        if listing.error:
            ui.label(f"Error loading categories: {listing.error}").style("color: red;")
        if not listing.categories:
            ui.label("No categories yet. Add your first category!").classes("muted")
            return

        for summary in listing.summaries:
            category = summary.category
            with ui.card().classes("w-full"):
                with ui.row().classes("w-full items-center justify-between"):
                    with ui.row().classes("items-center gap-4"):
                        ui.icon(summary.icon.glyph, size="md")
                        with ui.column().classes("gap-0"):
                            ui.label(category.name).classes("font-semibold")
                            ui.label(summary.count_label).classes("muted text-sm")
                    with ui.row():
                        ui.button(icon="edit", on_click=lambda c=category: self._category_dialog(c)).props("flat")
                        ui.button(
                            icon="delete", on_click=lambda c=category: self._delete_category(c)
                        ).props("flat color=negative")

    def _category_dialog(self, category: Optional[Category]) -> None:
        icons = {icon.value: icon.label for icon in CategoryIcon}
        with ui.dialog() as dialog, ui.card().classes("w-96"):
            ui.label("Edit Category" if category else "Add Category").classes("text-xl font-bold")
            name = ui.input("Category Name", value=category.name if category else "").classes("w-full")
            icon = ui.select(
                icons,
                label="Icon",
                value=CategoryIcon.from_key(category.icon).value if category else CategoryIcon.default().value,
            ).classes("w-full")

            async def save():
                try:
                    form = parse_category_form(name=name.value or "", icon=icon.value)
                    if category:
                        await self.category_admin.update(category.id, form)
                    else:
                        await self.category_admin.create(form)
                except FormError as e:
                    ui.notify(str(e), type="warning")
                    return
                except StoreError as e:
                    logger.error(f"Error saving category: {e}")
                    ui.notify(f"Error saving category: {e.message}", type="negative")
                    return
                dialog.close()
                await self.load_view(View.MANAGE_CATEGORIES)

            with ui.row().classes("w-full justify-end"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Update" if category else "Add", on_click=save)
        dialog.open()

    async def _delete_category(self, category: Category) -> None:
        if self.category_admin.product_count(category.id) > 0:
            await self._alert(CATEGORY_NOT_EMPTY_MESSAGE)
            return
        if not await self._confirm("Are you sure you want to delete this category?"):
            return
        try:
            await self.category_admin.delete(category.id)
        except CategoryNotEmptyError as e:
            await self._alert(str(e))
            return
        except StoreError as e:
            logger.error(f"Error deleting category: {e}")
            ui.notify(f"Error deleting category: {e.message}", type="negative")
            return
        await self.load_view(View.MANAGE_CATEGORIES)

    # --- Manage products ---

    def render_manage_products(self) -> None:
        with ui.row().classes("w-full justify-between items-center"):
            with ui.column().classes("gap-0"):
                ui.label("Manage Products").classes("text-3xl font-bold")
                ui.label("Add, edit, or remove products").classes("muted")
            ui.button("Add Product", icon="add", on_click=lambda: self._product_dialog(None))

        if self.admin_loading:
            ui.spinner(size="lg")
            return

        if not self.product_rows:
            ui.label("No products yet. Add your first product!").classes("muted")
            return

        with ui.column().classes("w-full gap-2"):
            for row in self.product_rows:
                product = row.product
                with ui.card().classes("w-full"):
                    with ui.row().classes("w-full items-center no-wrap gap-4"):
                        ui.image(product.image_url).classes("w-16 h-16").props("fit=contain")
                        with ui.column().classes("grow gap-0"):
                            ui.label(product.name).classes("font-semibold")
                            ui.label(product.sku).classes("sku")
                        ui.label(row.category_name).classes("muted w-40")
                        ui.label(format_price(product.price, product.price_max)).classes("price w-48 text-right")
                        ui.button(icon="edit", on_click=lambda p=product: self._product_dialog(p)).props("flat")
                        ui.button(
                            icon="delete", on_click=lambda p=product: self._delete_product(p)
                        ).props("flat color=negative")

    def _product_dialog(self, product: Optional[Product]) -> None:
        categories = {c.id: c.name for c in self.product_admin.categories}
        image = {"url": product.image_url if product else ""}

        with ui.dialog() as dialog, ui.card().classes("w-[32rem]"):
            ui.label("Edit Product" if product else "Add Product").classes("text-xl font-bold")
            name = ui.input("Product Name", value=product.name if product else "").classes("w-full")
            sku = ui.input("SKU", value=product.sku if product else "").classes("w-full").props(
                "input-class=font-mono"
            )
            category = ui.select(
                categories,
                label="Category",
                value=product.category_id if product and product.category_id in categories else None,
            ).classes("w-full")
            with ui.row().classes("w-full no-wrap"):
                price = ui.input(
                    f"Price ({settings.CURRENCY_SYMBOL})",
                    value=str(product.price) if product else "",
                ).classes("grow")
                price_max = ui.input(
                    f"Max price ({settings.CURRENCY_SYMBOL}, optional)",
                    value=str(product.price_max) if product and product.price_max is not None else "",
                ).classes("grow")
            preview = ui.image(image["url"]).classes("w-full h-40").props("fit=contain")
            preview.set_visibility(bool(image["url"]))
            url = ui.input("Image URL", value=image["url"] if not image["url"].startswith("data:") else "",
                           placeholder="https://example.com/image.jpg").classes("w-full")

            def on_url(e):
                if e.value:
                    image["url"] = e.value
                    preview.set_source(e.value)
                    preview.set_visibility(True)

            url.on_value_change(on_url)

            def on_upload(e):
                try:
                    image["url"] = image_to_data_url(e.content.read())
                except ImageError as ex:
                    ui.notify(str(ex), type="negative")
                    return
                preview.set_source(image["url"])
                preview.set_visibility(True)
                ui.notify(f"Image {e.name} ready", type="positive")

            ui.upload(label="Or upload an image", auto_upload=True, on_upload=on_upload).props(
                'accept="image/*"'
            ).classes("w-full")

            async def save():
                try:
                    form = parse_product_form(
                        name=name.value,
                        sku=sku.value,
                        price=price.value,
                        price_max=price_max.value,
                        image_url=image["url"],
                        category_id=category.value,
                    )
                    if product:
                        await self.product_admin.update(product.id, form)
                    else:
                        await self.product_admin.create(form)
                except FormError as e:
                    ui.notify(str(e), type="warning")
                    return
                except StoreError as e:
                    logger.error(f"Error saving product: {e}")
                    ui.notify(f"Error saving product: {e.message}", type="negative")
                    return
                dialog.close()
                await self.load_view(View.MANAGE_PRODUCTS)

            with ui.row().classes("w-full justify-end"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Update" if product else "Add", on_click=save)
        dialog.open()

    async def _delete_product(self, product: Product) -> None:
        if not await self._confirm(f"Are you sure you want to delete {product.name} ({format_amount(product.price)})?"):
            return
        try:
            await self.product_admin.delete(product.id)
        except StoreError as e:
            logger.error(f"Error deleting product: {e}")
            ui.notify(f"Error deleting product: {e.message}", type="negative")
            return
        await self.load_view(View.MANAGE_PRODUCTS)

    # --- Dialog helpers ---

    async def _confirm(self, message: str) -> bool:
        with ui.dialog() as dialog, ui.card():
            ui.label(message)
            with ui.row().classes("w-full justify-end"):
                ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
                ui.button("Delete", on_click=lambda: dialog.submit(True)).props("color=negative")
        return bool(await dialog)

    async def _alert(self, message: str) -> None:
        with ui.dialog() as dialog, ui.card():
            ui.label(message)
            ui.button("OK", on_click=lambda: dialog.submit(None))
        await dialog


def register_pages(client: CatalogClient) -> None:
    @ui.page("/")
    async def index():
        catalog_app = CatalogApp(client, app.storage.user)
        catalog_app.build()
        await catalog_app.load_view(catalog_app.navigator.current)
