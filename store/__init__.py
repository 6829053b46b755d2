#Marks store as a package.
#Re-exports the Record Store client so callers do not depend on file names.

from .supabase_client import SupabaseRecordStore, RecordStoreError

__all__ = [
    "SupabaseRecordStore",
    "RecordStoreError",
]
