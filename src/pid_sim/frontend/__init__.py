# MIT License (see LICENSE)
"""
Interactive frontends. Requires the optional ``app`` extra (pygame).

    from pid_sim.frontend.pygame_app import run_app
    run_app()
"""
