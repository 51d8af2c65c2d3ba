from packages.checkout.providers.navigation.interface import (
    NavigatorInterface,
    NotifierInterface,
)

__all__ = ["NavigatorInterface", "NotifierInterface"]
