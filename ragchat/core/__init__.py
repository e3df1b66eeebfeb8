"""Core domain logic: chunking, embedding, context assembly, agents."""
