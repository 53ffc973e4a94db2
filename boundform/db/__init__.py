from boundform.db.records import ModelRecord, as_record

__all__ = ["ModelRecord", "as_record"]
