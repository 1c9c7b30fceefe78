"""
Admin License Service Django project.
"""
