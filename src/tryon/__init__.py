"""TRY-ON storefront backend: product records and image-to-3D generation."""
