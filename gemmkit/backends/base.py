# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Backend abstract base class and backend registry.

A backend is the compute substrate behind a ``Matrix``. It owns the buffer
type, allocates and transfers buffers, and runs GEMM. Backends are
stateless: every operation is a classmethod and a ``Matrix`` holds the
backend class itself, never an instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

import numpy as np

from gemmkit.errors import BackendError, ShapeError

__all__ = ["Backend", "HostContext", "HOST"]


class HostContext:
    """No-op context shared by every host-memory backend."""

    _instance: ClassVar[HostContext | None] = None

    def __new__(cls) -> HostContext:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "HostContext()"


HOST = HostContext()


class Backend(ABC):
    """Capability set that a compute substrate must provide to back a Matrix.

    Subclasses set ``name``, ``buffer_type`` and ``context_type`` as class
    attributes and implement the abstract classmethods. Concrete subclasses are
    registered by ``name`` on definition; intermediate bases set
    ``_abstract = True`` in their own class body to stay out of the registry.

    Attributes:
        name: Unique name for registry lookup (e.g. ``"cpu-simd"``).
        buffer_type: Type of the opaque storage handle returned by
            ``allocate`` and ``upload``.
        context_type: Type of the per-backend context passed to every
            operation.
    """

    name: ClassVar[str]
    buffer_type: ClassVar[type]
    context_type: ClassVar[type]

    _registry: ClassVar[dict[str, type[Backend]]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Auto-register concrete Backend subclasses by name."""
        super().__init_subclass__(**kwargs)
        if hasattr(cls, "name") and not cls.__dict__.get("_abstract", False):
            if cls.name in Backend._registry:
                raise ValueError(f"Duplicate backend name: {cls.name}")
            Backend._registry[cls.name] = cls

    @classmethod
    def get(cls, name: str) -> type[Backend]:
        """Look up a registered backend by name.

        Args:
            name: The backend name to look up.

        Returns:
            The Backend subclass registered under that name.

        Raises:
            KeyError: If no backend is registered with the given name.
        """
        if name not in cls._registry:
            raise KeyError(f"Unknown backend: {name}. Available: {', '.join(sorted(cls._registry))}")
        return cls._registry[name]

    @classmethod
    def all_backends(cls) -> dict[str, type[Backend]]:
        """Return a copy of all registered Backend subclasses.

        Returns:
            Dictionary mapping backend name to Backend subclass.
        """
        return dict(cls._registry)

    @classmethod
    def default_context(cls) -> Any:
        """Context used when an operation receives ``ctx=None``."""
        return cls.context_type()

    @classmethod
    def resolve_context(cls, ctx: Any) -> Any:
        """Return ``ctx``, or the default context when ``ctx`` is None.

        Raises:
            BackendError: If ``ctx`` is not an instance of ``context_type``.
        """
        if ctx is None:
            return cls.default_context()
        if not isinstance(ctx, cls.context_type):
            raise BackendError(
                f"{cls.name} backend expects a {cls.context_type.__name__}, got {type(ctx).__name__}"
            )
        return ctx

    @classmethod
    @abstractmethod
    def allocate(cls, ctx: Any, size: int) -> Any:
        """Allocate a zero-initialized buffer of exactly ``size`` elements.

        Raises:
            BackendError: If the backend cannot satisfy the request.
        """

    @classmethod
    @abstractmethod
    def upload(cls, ctx: Any, host: Any) -> Any:
        """Copy host-resident floats into a newly allocated buffer of matching length.

        Raises:
            BackendError: If the data cannot be transferred.
        """

    @classmethod
    @abstractmethod
    def download(cls, ctx: Any, buffer: Any, host: np.ndarray) -> None:
        """Copy ``buffer`` into caller-provided host storage.

        ``host`` must hold exactly as many elements as ``buffer``. This is
        a precondition of the call and is not checked.
        """

    @classmethod
    @abstractmethod
    def buffer_length(cls, buffer: Any) -> int:
        """Return the number of elements held by ``buffer``."""

    @classmethod
    @abstractmethod
    def gemm(cls, ctx: Any, m: int, k: int, n: int, a: Any, b: Any, c: Any) -> None:
        """Compute ``c = a @ b`` for an m x k ``a`` and a k x n ``b``.

        Every element of ``c`` is overwritten.

        Raises:
            ShapeError: If buffer lengths do not match the declared dimensions.
            BackendError: If the substrate fails.
        """

    @classmethod
    def check_gemm_dims(cls, m: int, k: int, n: int, a_len: int, b_len: int, c_len: int) -> None:
        """Validate buffer lengths against the declared GEMM dimensions.

        Args:
            m: Rows of ``a`` and ``c``.
            k: Contraction dimension.
            n: Columns of ``b`` and ``c``.
            a_len: Element count of the ``a`` buffer.
            b_len: Element count of the ``b`` buffer.
            c_len: Element count of the ``c`` buffer.

        Raises:
            ShapeError: If any length disagrees with the dimensions.
        """
        if min(m, k, n) < 0:
            raise ShapeError(f"Negative GEMM dimensions m={m} k={k} n={n}")
        if a_len != m * k:
            raise ShapeError(f"lhs buffer holds {a_len} elements, expected m*k = {m}*{k}")
        if b_len != k * n:
            raise ShapeError(f"rhs buffer holds {b_len} elements, expected k*n = {k}*{n}")
        if c_len != m * n:
            raise ShapeError(f"output buffer holds {c_len} elements, expected m*n = {m}*{n}")
