"""Service types domain - Recurring service definitions and service generation"""
