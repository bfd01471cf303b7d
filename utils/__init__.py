"""
Small pure helpers shared by models and services.
"""
