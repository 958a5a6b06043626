"""
GraphQL multipart request (file upload) support for Strawberry on Django
"""
