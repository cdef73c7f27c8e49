"""Contract Wizard -- scaffolds Soroban smart contracts and derives editor affordances.

Subpackages:

* ``contract_wizard.codegen`` -- template scaffolds, reference renaming and
  the generator facade consumed by the UI layer.
* ``contract_wizard.analyzer`` -- line-oriented source scanning and code-lens
  assembly.

Top-level modules hold the virtual project model, the editor session, the
remote collaborators (catalog fetch, build submission), configuration and
the CLI.
"""

__version__ = "0.1.0"
