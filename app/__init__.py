"""Periodic Tables reservation backend"""
