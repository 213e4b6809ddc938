from .json_parsing import strict_json_loads

__all__ = ["strict_json_loads"]
