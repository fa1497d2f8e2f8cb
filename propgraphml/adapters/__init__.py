from .dataframe_adapter import to_dataframes
from .networkx import from_nx, to_nx

__all__ = ["to_dataframes", "to_nx", "from_nx"]
