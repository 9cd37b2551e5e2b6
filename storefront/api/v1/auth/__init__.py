"""Authentication dependencies"""
