from contract_compare.storage.json_writer import ReportWriter

__all__ = ["ReportWriter"]
