# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Errors raised by the Monte Carlo engine."""


class InvalidConfiguration(ValueError):
    """Raised when inputs or simulation options cannot produce a valid run.

    Reported before any simulation starts. Values are never silently clamped.
    """
