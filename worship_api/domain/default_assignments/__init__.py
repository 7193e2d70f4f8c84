"""Default assignments domain - Standing instrument assignments per service type"""
