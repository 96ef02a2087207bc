# SPDX-License-Identifier: MIT
"""Package data for lints (lookup tables loaded by initialize())."""
