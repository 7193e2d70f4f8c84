"""Suggestions domain - Song suggestions and their approval"""
