# blogsphere/utils/__init__.py
