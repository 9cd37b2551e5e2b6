"""Categories API"""
