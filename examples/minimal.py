"""
Minimal example: build the document context of one chat turn.

Usage:
    python minimal.py
"""

from doccompress import BudgetConfig, CompressConfig, ContextBuilder, RawDocument


def main() -> None:
    """Compress two documents into a deliberately small budget."""

    config = CompressConfig(
        budget=BudgetConfig(
            max_tokens=12000,
            max_system_tokens=1000,
            max_history_tokens=1000,
            max_response_tokens=1000,
            min_tokens_per_doc=1500,
        ),
        use_query_keywords=True,
        telemetry_enabled=False,
    )

    paragraph = (
        "Le budget de l'exercice doit être révisé avant la fin du trimestre. "
        "Les dépenses de fonctionnement ont augmenté de 12 % en 2023. "
        "La direction devrait valider le plan d'action proposé.\n\n"
    )
    documents = [
        RawDocument(name="rapport.md", content="# Rapport annuel\n\n" + paragraph * 200),
        RawDocument(name="note.txt", content="Réunion reportée au 14 mars."),
    ]

    builder = ContextBuilder(config)
    context = builder.build(documents, query="Quel est le budget de fonctionnement ?")

    for doc in context.documents:
        print(
            f"{doc.name}: {doc.original_tokens} -> {doc.compressed_tokens} tokens"
            f" (compressed={doc.compressed})"
        )
    print(f"Context: {context.total_tokens} tokens for {context.document_count} documents")


if __name__ == "__main__":
    main()
