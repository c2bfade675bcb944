"""Processing services: extraction, chunking, embeddings and the pipeline."""
