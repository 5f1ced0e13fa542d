"""Domain rules independent of HTTP and storage.

- **localization**: language resolution and localized query building
- **pagination**: page windows and cursor hints
- **pricing**: normalization of form-like price list input
"""
