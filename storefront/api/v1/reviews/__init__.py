"""Reviews API"""
