# blogsphere/services/__init__.py
