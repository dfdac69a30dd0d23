# blogsphere/auth/__init__.py
