"""Portfolio API - backend for a portfolio and price catalog site.

Architecture Overview:
- **API Layer**: FastAPI routers, request dependencies and middleware
- **Core Layer**: Configuration, exceptions, logging and tracing
- **Domain Layer**: Localized queries, page windows and price input parsing
- **Infrastructure Layer**: MongoDB repositories and the image folder listing

Projects, questions and the price list live in MongoDB; project and price
documents carry one field per language (``title-en``, ``title-ru``) that the
API folds into a single key for the requested language.
"""
