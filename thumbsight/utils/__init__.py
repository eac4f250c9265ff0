"""Utility helpers for ThumbSight"""
