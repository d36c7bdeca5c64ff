"""
Catalog Tree Version Information
Single source of truth for the package version across all components
"""

__version__ = "1.2.0"

# Application metadata
APP_NAME = "Catalog Tree"
APP_FULL_NAME = "Catalog Tree - Product Hierarchy Console"
APP_DESCRIPTION = "Category and family hierarchy building, picking and cycle-safe parent selection"

# Version components for programmatic access
VERSION_MAJOR = 1
VERSION_MINOR = 2
VERSION_PATCH = 0

BUILD_TYPE = "stable"  # stable, beta, alpha, dev
