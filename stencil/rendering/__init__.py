from .output import concatenate, to_output_string

__all__ = ["concatenate", "to_output_string"]
