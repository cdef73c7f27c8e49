"""Shared pytest fixtures for the Contract Wizard test suite.

Provides reusable fixtures for:
- Small hand-written contract sources
- Fresh facades and project models
"""

from __future__ import annotations

import textwrap

import pytest

from contract_wizard.codegen.facade import GeneratorFacade
from contract_wizard.project import ProjectModel


# ---------------------------------------------------------------------------
# Contract sources
# ---------------------------------------------------------------------------


@pytest.fixture
def token_contract_source() -> str:
    """A minimal contract with two entry points and one event."""
    return textwrap.dedent(
        """\
        #![no_std]
        use soroban_sdk::{contract, contractimpl, Address, Env, Symbol};

        #[contract]
        pub struct TokenContract;

        #[contractimpl]
        impl TokenContract {
            pub fn mint(env: Env, to: Address, amount: i128) -> Result<(), Error> {
                env.events().publish((Symbol::new(&env, "mint"), to), amount);
                Ok(())
            }

            pub fn balance(env: Env, id: Address) -> i128 {
                0
            }
        }
        """
    )


@pytest.fixture
def reference_voting_source() -> str:
    """A catalog-style reference contract with a trait impl header."""
    return textwrap.dedent(
        """\
        #![no_std]
        use soroban_sdk::{contract, contractimpl, Address, Env};

        #[contract]
        pub struct ProposalVotingContract;

        #[contractimpl]
        impl ProposalVotingContract {
            pub fn init(env: Env, admin: Address, total_voters: u32) -> Result<(), Error> {
                Ok(())
            }
        }
        """
    )


# ---------------------------------------------------------------------------
# Domain objects
# ---------------------------------------------------------------------------


@pytest.fixture
def facade() -> GeneratorFacade:
    """A facade with no banner, ready for any trait."""
    return GeneratorFacade()


@pytest.fixture
def project() -> ProjectModel:
    """A multi-file project: ``src/lib.rs`` and ``Cargo.toml``."""
    model = ProjectModel(name="demo")
    model.initialize_multi_file()
    return model
