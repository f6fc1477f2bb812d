"""AcademiaDrive Explorer: static folder/PDF listings for a content tree."""
