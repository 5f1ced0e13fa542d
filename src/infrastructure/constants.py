"""Infrastructure-related constants."""

# Field names written on every price item
CREATED_AT_FIELD = "createdAt"
UPDATED_AT_FIELD = "updatedAt"

# Public URL prefix under which the image folders are served
IMAGES_URL_PREFIX = "/images"
