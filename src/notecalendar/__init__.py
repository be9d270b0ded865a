from .grid import Day, Grid, InvalidArgumentError, Week, build_grid

__all__ = ["Day", "Grid", "InvalidArgumentError", "Week", "build_grid"]
