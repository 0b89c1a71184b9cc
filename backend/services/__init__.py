"""
Simulation services: spawning, collisions, the transition engine, game
setup and the tick scheduler.
"""
