"""Demo scenario runner."""

from .sim import DEMO_ASSETS, DEMO_COMPETITORS, DEMO_TASKS, SCRIPTED_UPDATES, ISim, Sim

__all__ = ["DEMO_ASSETS", "DEMO_COMPETITORS", "DEMO_TASKS", "SCRIPTED_UPDATES", "ISim", "Sim"]
