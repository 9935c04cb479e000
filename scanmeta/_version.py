# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

__version__ = "0.1.0"
