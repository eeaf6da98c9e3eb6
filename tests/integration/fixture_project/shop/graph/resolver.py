"""Root resolver holding dependencies."""

from shop.loader import UserLoader
from shop.usecase import OrderUseCase, UserUseCase


class Resolver:
    users: UserUseCase
    orders: OrderUseCase
    user_loader: UserLoader
