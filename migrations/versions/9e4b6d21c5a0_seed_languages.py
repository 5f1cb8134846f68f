"""seed_languages

Revision ID: 9e4b6d21c5a0
Revises: 3c1f0a9d2b7e
Create Date: 2025-01-06 19:40:51.102847

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "9e4b6d21c5a0"
down_revision: Union[str, Sequence[str], None] = "3c1f0a9d2b7e"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


FEATURED = [
    ("JavaScript", "Versatile language of the web", "#f7df1e"),
    ("Python", "Simple and powerful, from scripting to AI", "#3776ab"),
    ("TypeScript", "JavaScript with static types", "#3178c6"),
    ("Java", "Robust language for enterprise applications", "#ed8b00"),
    ("C++", "High-performance systems language", "#00599c"),
    ("C#", "Microsoft's language for .NET", "#512bd4"),
    ("Go", "Google's language for distributed systems", "#00add8"),
    ("Rust", "Memory-safe systems programming", "#ce422b"),
    ("PHP", "Popular server-side web language", "#777bb4"),
    ("Swift", "Apple's language for iOS and macOS", "#fa7343"),
    ("Kotlin", "Modern language interoperable with Java", "#7f52ff"),
    ("Ruby", "Elegant and expressive", "#cc342d"),
    ("C", "The foundational systems language", "#a8b9cc"),
    ("Dart", "Google's language for Flutter", "#0175c2"),
    ("Scala", "Functional programming on the JVM", "#dc322f"),
    ("R", "Statistical computing and graphics", "#276dc3"),
    ("Perl", "Powerful text processing", "#39457e"),
    ("Lua", "Lightweight and embeddable", "#2c2d72"),
    ("Haskell", "Purely functional", "#5d4f85"),
    ("Elixir", "Functional language for concurrent systems", "#6e4a7e"),
]

ADDITIONAL = [
    ("F#", "Functional-first language for .NET", "#378bba"),
    ("Clojure", "A Lisp for the JVM", "#5881d8"),
    ("Julia", "High-performance scientific computing", "#9558b2"),
    ("Erlang", "Fault-tolerant concurrent systems", "#a90533"),
    ("OCaml", "Industrial-strength functional programming", "#ec6813"),
    ("Nim", "Efficient and expressive systems language", "#ffe953"),
    ("Crystal", "Ruby-like syntax, compiled speed", "#000100"),
    ("Zig", "Robust, optimal and reusable software", "#f7a41d"),
    ("Fortran", "Numerical and scientific computing", "#734f96"),
    ("COBOL", "Business data processing", "#005ca5"),
    ("Groovy", "Dynamic language for the JVM", "#4298b8"),
    ("Elm", "Delightful language for reliable web apps", "#60b5cc"),
    ("Racket", "Language-oriented programming", "#9f1d20"),
    ("Common Lisp", "The programmable programming language", "#3fb68b"),
    ("Prolog", "Logic programming", "#74283c"),
    ("MATLAB", "Numerical computing environment", "#e16737"),
    ("PowerShell", "Task automation and configuration", "#012456"),
    ("Bash", "The Unix shell", "#4eaa25"),
    ("Assembly", "Low-level machine programming", "#6e4c13"),
    ("Solidity", "Smart contracts on Ethereum", "#363636"),
]


def upgrade() -> None:
    """Seed the language catalogue."""
    languages_table = sa.table(
        "languages",
        sa.column("name", sa.String),
        sa.column("description", sa.Text),
        sa.column("color", sa.String),
        sa.column("is_featured", sa.Boolean),
    )

    op.bulk_insert(
        languages_table,
        [
            {"name": name, "description": description, "color": color, "is_featured": True}
            for name, description, color in FEATURED
        ]
        + [
            {"name": name, "description": description, "color": color, "is_featured": False}
            for name, description, color in ADDITIONAL
        ],
    )


def downgrade() -> None:
    """Remove seeded languages that have never received points."""
    names = [name for name, _, _ in FEATURED + ADDITIONAL]
    op.execute(
        sa.text(
            "DELETE FROM languages WHERE name = ANY(:names) AND total_points = 0"
        ).bindparams(sa.bindparam("names", value=names, type_=sa.ARRAY(sa.String)))
    )
