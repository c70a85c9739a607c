from .debug_writer import write_bic_debug_bundle

__all__ = ["write_bic_debug_bundle"]
