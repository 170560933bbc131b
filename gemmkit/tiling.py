# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import math

import tabulate

TILE_WIDTH = 8


class TilePlan:
    """Partition of the GEMM contraction axis into fixed-width tiles.

    The last tile is ragged when ``TILE_WIDTH`` does not divide ``k``.

    Example: k=13, tile_width=8
    - 2 tiles: [0, 8) and [8, 13)
    - padded_k = 16, remainder = 5
    """

    def __init__(self, m: int, k: int, n: int, tile_width: int = TILE_WIDTH) -> None:
        """
        Args:
            m: Rows of the output matrix.
            k: Contraction dimension size.
            n: Columns of the output matrix.
            tile_width: Elements per tile along k.
        """
        if tile_width <= 0:
            raise ValueError(f"tile_width must be positive, got {tile_width}")
        self.M = m
        self.K = k
        self.N = n
        self.TILE_K = tile_width
        self.TILES_IN_K = math.ceil(k / tile_width)
        self.PADDED_K = self.TILES_IN_K * tile_width
        # Width of the final tile; equals TILE_K when the tiles cover k exactly.
        self.REMAINDER = k - (self.TILES_IN_K - 1) * tile_width if k else 0

    @property
    def is_ragged(self) -> bool:
        return self.REMAINDER != self.TILE_K and self.K > 0

    def tile_bounds(self) -> list[tuple[int, int]]:
        """
        Return the ``(start, end)`` span of every tile along k.

        The end of the final tile is bounded at ``k``.
        """
        return [(t, min(t + self.TILE_K, self.K)) for t in range(0, self.K, self.TILE_K)]

    def __repr__(self) -> str:
        """
        Return a formatted string representation of the tile plan.

        Returns:
            str: Tabulated view of the GEMM dimensions and tiling of k.
        """
        header = f"{self.__class__.__name__}(M={self.M}, K={self.K}, N={self.N})"
        table_data = [
            ["Tile width", self.TILE_K],
            ["Tiles in K", self.TILES_IN_K],
            ["Padded K", self.PADDED_K],
            ["Final tile width", self.REMAINDER],
        ]
        table = tabulate.tabulate(
            table_data, headers=["Parameter", "K (contraction)"], tablefmt="simple_outline", numalign="right"
        )
        return f"{header}\n{table}"
