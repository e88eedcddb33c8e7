from .datatypes import Sentence, Document, Edge, Graph, SummaryResult
from .config import RankConfig, EmbeddingConfig
from .errors import SummarizerError, DimensionMismatchError, EmbeddingProviderError
from .preprocessing import split_sentences, preprocess_text
from .embedding import EmbeddingProvider, SentenceTransformerEmbedder
from .features import cosine_similarity, embed_sentences, compute_similarity_matrix
from .graphing import build_graph, build_adjacency, out_sums
from .scoring import textrank_scores
from .summarize import summarize, summarize_document, generate_summary, Summarizer
