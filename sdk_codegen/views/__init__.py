"""Derived views that group IR nodes the way targets render them."""

from .action_view import ActionView, FilterParameter, SubParameterGroup, ViewOptions
from .response_view import NamedEnum, ResourceView, ResponseView, required_first

__all__ = [
    "ActionView",
    "FilterParameter",
    "NamedEnum",
    "ResourceView",
    "ResponseView",
    "SubParameterGroup",
    "ViewOptions",
    "required_first",
]
