"""Compatibility helpers for Streamlit keyword arguments that changed across releases."""
from __future__ import annotations

import inspect
from functools import lru_cache
from typing import Any, Callable, Dict, FrozenSet

import streamlit as st

ComponentCallable = Callable[..., Any]


def _unwrap_callable(func: ComponentCallable) -> ComponentCallable:
    """Return the underlying callable for decorated functions."""
    wrapped = getattr(func, "__wrapped__", None)
    while wrapped is not None:
        func = wrapped
        wrapped = getattr(func, "__wrapped__", None)
    return func


@lru_cache(maxsize=None)
def _parameters(func: ComponentCallable) -> FrozenSet[str]:
    try:
        return frozenset(inspect.signature(_unwrap_callable(func)).parameters)
    except (TypeError, ValueError):
        return frozenset()


def use_container_width_kwargs(func: ComponentCallable) -> Dict[str, Any]:
    """Return the kwargs stretching *func* to the container width.

    Recent releases take ``width="stretch"`` and deprecate
    ``use_container_width``; older ones only know the latter.
    """

    parameters = _parameters(func)
    if "width" in parameters and "use_container_width" not in parameters:
        return {"width": "stretch"}
    if "use_container_width" in parameters:
        return {"use_container_width": True}
    return {}


def rerun() -> None:
    """Trigger a rerun across supported Streamlit versions."""

    if hasattr(st, "rerun"):
        st.rerun()
    else:  # pragma: no cover - legacy fallback
        st.experimental_rerun()


__all__ = ["use_container_width_kwargs", "rerun"]
