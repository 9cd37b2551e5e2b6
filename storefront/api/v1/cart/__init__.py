"""Cart API"""
