"""
Unit tests for the embedding generator (API calls mocked).
"""

from unittest.mock import patch

import pytest

from hobbytags.utils.embeddings import EmbeddingGenerator


@pytest.fixture
def mock_genai():
    with patch("hobbytags.utils.embeddings.genai") as genai:
        yield genai


def test_configures_api_key(mock_genai):
    EmbeddingGenerator(api_key="secret", embedding_dimensions=3)
    mock_genai.configure.assert_called_once_with(api_key="secret")


def test_generate_batch_single_request(mock_genai):
    mock_genai.embed_content.return_value = {"embedding": [[0.1, 0.2, 0.3], [0.3, 0.2, 0.1]]}
    generator = EmbeddingGenerator(api_key="k", model_name="models/test", embedding_dimensions=3)

    vectors = generator.generate_batch(["chess", "yoga, hiking"])

    assert vectors == [[0.1, 0.2, 0.3], [0.3, 0.2, 0.1]]
    mock_genai.embed_content.assert_called_once_with(
        model="models/test",
        content=["chess", "yoga, hiking"],
        task_type="clustering",
    )


def test_empty_batch_makes_no_request(mock_genai):
    generator = EmbeddingGenerator(api_key="k", embedding_dimensions=3)
    assert generator.generate_batch([]) == []
    mock_genai.embed_content.assert_not_called()


def test_rejects_empty_text(mock_genai):
    generator = EmbeddingGenerator(api_key="k", embedding_dimensions=3)
    with pytest.raises(ValueError, match="empty text at index 1"):
        generator.generate_batch(["chess", "   "])


def test_rejects_wrong_dimensions(mock_genai):
    mock_genai.embed_content.return_value = {"embedding": [[0.1, 0.2]]}
    generator = EmbeddingGenerator(api_key="k", embedding_dimensions=3)
    with pytest.raises(ValueError, match="Expected 3 dimensions"):
        generator.generate_batch(["chess"])


def test_rejects_zero_vector(mock_genai):
    mock_genai.embed_content.return_value = {"embedding": [[0.0, 0.0, 0.0]]}
    generator = EmbeddingGenerator(api_key="k", embedding_dimensions=3)
    with pytest.raises(ValueError, match="all zeros"):
        generator.generate_batch(["chess"])


def test_rejects_count_mismatch(mock_genai):
    mock_genai.embed_content.return_value = {"embedding": [[0.1, 0.2, 0.3]]}
    generator = EmbeddingGenerator(api_key="k", embedding_dimensions=3)
    with pytest.raises(ValueError, match="Expected 2 embeddings, got 1"):
        generator.generate_batch(["chess", "yoga"])


def test_provider_failure_propagates(mock_genai):
    mock_genai.embed_content.side_effect = RuntimeError("quota exceeded")
    generator = EmbeddingGenerator(api_key="k", embedding_dimensions=3)
    with pytest.raises(RuntimeError, match="quota exceeded"):
        generator.generate_batch(["chess"])
