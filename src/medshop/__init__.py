"""MedShop storefront API."""
