"""
Fuente de la Cloud Function. El runtime de Python de Cloud Functions busca
el entry point en main.py de la raíz del código desplegado.
"""

from cnab_extractor.infrastructure.cloud_function import extract_cnab

__all__ = ["extract_cnab"]
