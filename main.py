from __future__ import annotations
import streamlit as st
import re
import logging
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
import networkx as nx
import io

from text_ranker.config import RankConfig, EmbeddingConfig
from text_ranker.embedding import SentenceTransformerEmbedder
from text_ranker.preprocessing import preprocess_text
from text_ranker.features import embed_sentences, compute_similarity_matrix
from text_ranker.graphing import build_graph, isolated_nodes, out_sums
from text_ranker.scoring import textrank_scores
from text_ranker.summarize import Summarizer, generate_summary, rank_order, summary_size

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

def extract_rtf_text(rtf_content):
    """Extract plain text from RTF content."""
    # Remove RTF control words and groups
    text = re.sub(r'\\[a-z]+\d*', '', rtf_content)
    text = re.sub(r'[{}]', '', text)
    text = re.sub(r'\\\*.*?;', '', text)
    text = re.sub(r'\\[^a-z]', '', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()

def extract_markdown_text(md_content):
    """Extract plain text from Markdown content."""
    text = re.sub(r'```.*?```', '', md_content, flags=re.DOTALL)
    text = re.sub(r'^#{1,6}\s+', '', text, flags=re.MULTILINE)
    text = re.sub(r'\*{1,2}(.*?)\*{1,2}', r'\1', text)
    text = re.sub(r'\[([^\]]+)\]\([^)]+\)', r'\1', text)
    text = re.sub(r'`([^`]+)`', r'\1', text)
    text = re.sub(r'\n\s*\n', '\n\n', text)
    return text.strip()

def load_text_from_file(uploaded_file):
    """Load text content from uploaded file based on file type."""
    file_extension = uploaded_file.name.lower().split('.')[-1]
    content = uploaded_file.read().decode("utf-8")

    if file_extension == 'rtf':
        return extract_rtf_text(content)
    elif file_extension == 'md':
        return extract_markdown_text(content)
    return content

@st.cache_resource
def get_embedder(model_name: str, revision: str, device: str):
    cfg = EmbeddingConfig(model_name=model_name, revision=revision or None, device=device or None)
    return SentenceTransformerEmbedder(cfg)

def preview(text: str, width: int = 80) -> str:
    return text[:width] + "..." if len(text) > width else text

def draw_graph_visualization(graph, scores, selected, edge_threshold):
    """Similarity graph: node size follows TextRank score, selected sentences in yellow."""
    G = nx.Graph()
    for i, sentence in enumerate(graph.nodes):
        G.add_node(i, preview=preview(sentence.text, 30))
    for edge in graph.edges:
        G.add_edge(edge.i, edge.j, weight=edge.weight)

    fig, ax = plt.subplots(figsize=(10, 8))
    ax.set_title(f"Sentence Graph (edges with similarity ≥ {edge_threshold:.2f})", fontsize=14, fontweight='bold')

    if len(G.nodes) > 0:
        pos = nx.spring_layout(G, k=2, iterations=50, seed=42)
        max_score = max(scores) if scores and max(scores) > 0 else 1.0
        sizes = [300 + 1500 * (scores[i] / max_score) for i in G.nodes()]
        colors = ['gold' if i in selected else 'lightblue' for i in G.nodes()]

        nx.draw_networkx_nodes(G, pos, ax=ax, node_color=colors, node_size=sizes, alpha=0.8)

        edges = G.edges(data=True)
        if edges:
            weights = [e[2]['weight'] for e in edges]
            max_weight = max(weights) if weights else 1
            edge_widths = [3 * (w / max_weight) for w in weights]
            nx.draw_networkx_edges(G, pos, ax=ax, width=edge_widths, alpha=0.6, edge_color='gray')

        labels = {i: f"S{i+1}" for i in G.nodes()}
        nx.draw_networkx_labels(G, pos, labels, ax=ax, font_size=10, font_weight='bold')

        if len(G.nodes) <= 10:
            edge_labels = {(u, v): f"{d['weight']:.2f}" for u, v, d in G.edges(data=True)}
            nx.draw_networkx_edge_labels(G, pos, edge_labels, ax=ax, font_size=8)

    ax.set_aspect('equal')
    ax.axis('off')
    plt.tight_layout()

    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    buf.seek(0)
    plt.close()
    return buf

def create_sidebar_controls():
    """Create sidebar controls for parameters."""
    st.sidebar.header("Parameters")
    ratio = st.sidebar.slider(
        "Compression ratio",
        min_value=0.1,
        max_value=1.0,
        value=0.4,
        step=0.05,
        help="Fraction of sentences kept in the summary"
    )

    env_cfg = EmbeddingConfig.from_env()
    st.sidebar.header("Embedding Model")
    model_name = st.sidebar.text_input("Model", value=env_cfg.model_name)
    revision = st.sidebar.text_input("Revision", value=env_cfg.revision or "")
    device = st.sidebar.selectbox("Device", ["", "cpu", "cuda"], index=0, help="Empty picks cuda when available")

    st.sidebar.header("Debug Options")
    debug_mode = st.sidebar.checkbox("Enable Debug Mode", value=True, help="Show detailed pipeline steps")
    edge_threshold = st.sidebar.slider(
        "Graph display threshold",
        min_value=0.0,
        max_value=1.0,
        value=0.3,
        step=0.05,
        help="Only used for drawing; ranking uses every non-zero similarity"
    )

    return ratio, (model_name, revision, device), debug_mode, edge_threshold

def debug_pipeline(text: str, compression_ratio: float, embedder, edge_threshold: float):
    """Run the pipeline with detailed debugging information; returns (summary, scores) like summarize()."""
    cfg = RankConfig()

    # Step 1: Sentence splitting
    st.header("✂️ Step 1: Sentence Splitting")
    with st.expander("Splitting Details", expanded=True):
        st.write("**Running:** Abbreviation and quote aware sentence boundary detection")
        doc = preprocess_text(text, cfg=cfg)
        st.success(f"✅ Found {len(doc.sentences)} sentences")

        sentences_df = pd.DataFrame([{
            "Sentence #": s.idx + 1,
            "Tokens": s.n_tokens,
            "Embedded": "✅" if s.n_tokens >= cfg.min_embed_tokens else "❌ (too short)",
            "Text": preview(s.text),
        } for s in doc.sentences])
        st.dataframe(sentences_df, use_container_width=True)

    if len(doc.sentences) <= cfg.trivial_sentence_count:
        st.info(f"Document has {len(doc.sentences)} sentences; returning it unchanged.")
        return text, {}

    # Step 2: Embeddings
    st.header("🧮 Step 2: Sentence Embeddings")
    with st.expander("Embedding Details", expanded=True):
        with st.spinner("Embedding sentences..."):
            embeddings = embed_sentences(doc, embedder, cfg)
        dims = len(embeddings[0]) if embeddings else 0
        skipped = sum(1 for s in doc.sentences if s.n_tokens < cfg.min_embed_tokens)

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Embeddings", len(embeddings))
        with col2:
            st.metric("Dimensions", dims)
        with col3:
            st.metric("Sentinel (skipped)", skipped)

        norms = [float(np.linalg.norm(v)) for v in embeddings]
        st.dataframe(pd.DataFrame({
            "Sentence #": [i + 1 for i in range(len(embeddings))],
            "Norm": [f"{x:.3f}" for x in norms],
            "First values": [", ".join(f"{x:.3f}" for x in v[:5]) for v in embeddings],
        }), use_container_width=True)

    # Step 3: Similarity matrix
    st.header("📊 Step 3: Similarity Matrix")
    with st.expander("Similarity Details", expanded=True):
        simM = compute_similarity_matrix(embeddings)
        n = len(simM)
        if n <= 50:
            sim_df = pd.DataFrame(simM,
                                  columns=[f"S{i+1}" for i in range(n)],
                                  index=[f"S{i+1}" for i in range(n)])
            st.dataframe(sim_df.round(3), use_container_width=True)
        else:
            st.info(f"📊 Matrix too large to display ({n}×{n} = {n**2:,} cells)")

        flat_sim = [simM[i][j] for i in range(n) for j in range(i+1, n)]
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Min Similarity", f"{min(flat_sim):.3f}")
        with col2:
            st.metric("Max Similarity", f"{max(flat_sim):.3f}")
        with col3:
            st.metric("Mean Similarity", f"{np.mean(flat_sim):.3f}")
        with col4:
            st.metric("Std Similarity", f"{np.std(flat_sim):.3f}")

    # Step 4: Graph
    st.header("🕸️ Step 4: Sentence Graph")
    with st.expander("Graph Details", expanded=True):
        graph = build_graph(doc, simM)
        sums = out_sums(simM)
        lonely = isolated_nodes(graph)

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Nodes (Sentences)", len(graph.nodes))
        with col2:
            st.metric("Edges", len(graph.edges))
        with col3:
            st.metric("Isolated Nodes", len(lonely))

        st.dataframe(pd.DataFrame({
            "Sentence": [f"S{i+1}" for i in range(n)],
            "Out-degree Sum": [f"{s:.3f}" for s in sums],
            "Isolated": ["✅" if i in lonely else "" for i in range(n)],
        }), use_container_width=True)

    # Step 5: TextRank
    st.header("🎯 Step 5: TextRank Scoring")
    with st.expander("Scoring Details", expanded=True):
        st.write(f"**Running:** damping={cfg.damping}, epsilon={cfg.epsilon}, max iterations={cfg.max_iterations}")
        scores, iterations = textrank_scores(simM, cfg)
        if iterations < cfg.max_iterations:
            st.success(f"✅ Converged after {iterations} iterations")
        else:
            st.warning(f"Stopped after {iterations} iterations")

        scoring_df = pd.DataFrame([{
            "Rank": pos + 1,
            "Sentence #": idx + 1,
            "Score": f"{score:.4f}",
            "Text Preview": preview(doc.sentences[idx].text),
        } for pos, (idx, score) in enumerate(rank_order(scores))])
        st.dataframe(scoring_df, use_container_width=True)

    # Step 6: Selection
    st.header("📝 Step 6: Summary Selection")
    with st.expander("Selection Details", expanded=True):
        result = generate_summary(doc, scores, compression_ratio, iterations=iterations)
        k = summary_size(len(doc.sentences), compression_ratio)

        selection_df = pd.DataFrame([{
            "Sentence #": s.idx + 1,
            "Score": f"{scores[s.idx]:.4f}",
            "Selected": "✅" if s.idx in result.selected else "❌",
            "Text": s.text,
        } for s in doc.sentences])
        st.dataframe(selection_df, use_container_width=True)

        col1, col2 = st.columns(2)
        with col1:
            st.metric("Target Sentences", k)
        with col2:
            st.metric("Actual Ratio", f"{len(result.selected) / len(doc.sentences):.2%}")

        if len(graph.nodes) <= 50:
            try:
                graph_image = draw_graph_visualization(build_graph(doc, simM, threshold=edge_threshold),
                                                       scores, set(result.selected), edge_threshold)
                st.image(graph_image, caption="Sentence graph (selected sentences in yellow)", use_column_width=True)
            except Exception as e:
                st.error(f"Could not generate graph visualization: {str(e)}")

    return result.summary, result.scores

def main():
    st.title("Embedding TextRank Summarizer")
    st.write("Upload or paste a document to extract its most central sentences")

    ratio, model_opts, debug_mode, edge_threshold = create_sidebar_controls()

    uploaded_file = st.file_uploader(
        "Choose a text file",
        type=['txt', 'rtf', 'md'],
        help="Upload a text file to summarize (supports .txt, .rtf, .md formats)"
    )
    if uploaded_file is not None:
        text = load_text_from_file(uploaded_file)
    else:
        text = st.text_area("Or paste text", height=200)

    if text and st.button("Generate Summary", type="primary"):
        try:
            embedder = get_embedder(*model_opts)
            if debug_mode:
                st.markdown("---")
                st.title("🔍 Pipeline Debug Mode")
                summary, scores = debug_pipeline(text, ratio, embedder, edge_threshold)
            else:
                with st.spinner("Generating summary..."):
                    summary, scores = Summarizer(embedder).summarize(text, ratio)

            st.markdown("---")
            st.header("📋 Final Summary")
            st.text_area("Generated Summary", summary, height=150, disabled=True)

            col1, col2, col3 = st.columns(3)
            with col1:
                st.metric("Original Length", len(text.split()))
            with col2:
                st.metric("Summary Length", len(summary.split()) if summary else 0)
            with col3:
                compression = len(summary.split()) / len(text.split()) if text and summary else 0
                st.metric("Actual Compression", f"{compression:.2%}")

            if scores:
                st.dataframe(pd.DataFrame(sorted(scores.items(), key=lambda x: x[1], reverse=True),
                                          columns=["Sentence", "Score"]), use_container_width=True)

        except Exception as e:
            st.error(f"Error generating summary: {str(e)}")
            st.exception(e)

if __name__ == "__main__":
    main()
