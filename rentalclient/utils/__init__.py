from .fs import read_json_dict, write_json_atomic

__all__ = ["read_json_dict", "write_json_atomic"]
