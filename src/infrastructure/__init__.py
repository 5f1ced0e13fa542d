"""Infrastructure layer for data persistence and filesystem access.

- **Database access**: MongoDB through the async pymongo client
- **Repository pattern**: Collection access with error translation
- **Connection management**: Startup connect, health checks, and shutdown
- **Images**: Listing of the image folder tree served under /images
"""
