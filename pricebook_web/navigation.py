"""
In-memory view switcher (nothing is written to the browser URL).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class View(str, Enum):
    HOME = "home"
    CATEGORY = "category"
    ADMIN_LOGIN = "admin-login"
    MANAGE_PRODUCTS = "manage-products"
    MANAGE_CATEGORIES = "manage-categories"


ADMIN_VIEWS = {View.MANAGE_PRODUCTS, View.MANAGE_CATEGORIES}


@dataclass
class Navigator:
    is_admin: Callable[[], bool]
    current: View = View.HOME
    selected_category_id: Optional[str] = None

    def navigate(self, target) -> View:
        """Admin views without an admin session land on the login view."""
        view = View(target)
        if view in ADMIN_VIEWS and not self.is_admin():
            view = View.ADMIN_LOGIN
        if view == View.CATEGORY and self.selected_category_id is None:
            view = View.HOME
        self.current = view
        return view

    def open_category(self, category_id: str) -> View:
        self.selected_category_id = category_id
        self.current = View.CATEGORY
        return self.current

    def login_succeeded(self) -> View:
        return self.navigate(View.MANAGE_PRODUCTS)

    def logged_out(self) -> View:
        self.current = View.HOME
        return self.current
