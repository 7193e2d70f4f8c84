"""Set songs domain - Ordered songs within a worship set"""
