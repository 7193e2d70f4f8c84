"""Leader rotations domain - Rotating worship leaders per service type"""
