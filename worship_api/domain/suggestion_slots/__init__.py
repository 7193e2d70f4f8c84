"""Suggestion slots domain - Requests for team members to suggest songs"""
