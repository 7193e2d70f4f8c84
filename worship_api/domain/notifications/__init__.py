"""Notifications domain - Records of messages sent to team members"""
