from contract_compare.tasks.compare import CompareTask

__all__ = ["CompareTask"]
