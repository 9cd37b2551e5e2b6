"""Wishlist API"""
