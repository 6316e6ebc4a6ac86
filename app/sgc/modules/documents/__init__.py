"""
Controlled documents.

- Documents move Borrador -> En Revisión -> Activo -> Obsoleto by plain
  status edits; there is no approval workflow.
- Edits overwrite in place (no revision history); only lastModified moves.
"""
