"""Business domains, each with its own router, service and schemas"""
