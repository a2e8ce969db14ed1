from monad_agent.server.app import create_app, run_server

__all__ = ["create_app", "run_server"]
