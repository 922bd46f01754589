"""Catering Operations Platform backend"""
