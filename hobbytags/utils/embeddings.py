"""
Embeddings utility.

Generate sentence embeddings for respondents' hobby keyword strings.
"""

import logging
from typing import List

import google.generativeai as genai

logger = logging.getLogger(__name__)


class EmbeddingGenerator:
    """
    Generates text embeddings with Google's text-embedding models.

    All texts of a run are embedded in one batched request. There is no
    retry: a provider failure propagates and aborts the clustering run.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "models/text-embedding-004",
        embedding_dimensions: int = 768,
        task_type: str = "clustering"
    ):
        """
        Initialize embedding generator.

        Args:
            api_key: Google API key
            model_name: Embedding model to use
            embedding_dimensions: Expected output dimensions
            task_type: Embedding task hint passed to the API
        """
        self.model_name = model_name
        self.embedding_dimensions = embedding_dimensions
        self.task_type = task_type

        genai.configure(api_key=api_key)

        logger.info(f"Initialized EmbeddingGenerator with model={model_name}, dims={embedding_dimensions}")

    def generate_batch(self, texts: List[str]) -> List[List[float]]:
        """
        Embed a list of texts in a single request.

        Args:
            texts: Non-empty input texts

        Returns:
            One embedding vector per text, in input order

        Raises:
            ValueError: On empty input text, wrong dimensions, zero vectors
                or a response with the wrong number of vectors
        """
        if not texts:
            return []

        for i, text in enumerate(texts):
            if not text or len(text.strip()) == 0:
                raise ValueError(f"Cannot generate embedding for empty text at index {i}")

        logger.info(f"Embedding {len(texts)} texts with {self.model_name}")
        result = genai.embed_content(
            model=self.model_name,
            content=texts,
            task_type=self.task_type
        )

        embeddings = result["embedding"]
        if len(embeddings) != len(texts):
            raise ValueError(f"Expected {len(texts)} embeddings, got {len(embeddings)}")

        for embedding in embeddings:
            self._validate(embedding)

        return [list(e) for e in embeddings]

    def _validate(self, embedding: List[float]) -> None:
        if len(embedding) != self.embedding_dimensions:
            raise ValueError(
                f"Expected {self.embedding_dimensions} dimensions, got {len(embedding)}"
            )

        # All-zero vectors indicate an API failure
        if sum(abs(x) for x in embedding) < 0.01:
            raise ValueError("Embedding is all zeros (possible API failure)")
