"""Shared fixtures: small workspaces written under tmp_path."""

import os
from pathlib import Path
from textwrap import dedent

import pytest


@pytest.fixture
def write_tree(tmp_path):
    """Return a function writing ``{relative_path: content}`` under tmp_path."""

    def _write(files: dict, root: Path = tmp_path) -> Path:
        for rel_path, content in files.items():
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dedent(content).lstrip(), encoding="utf-8")
        return root

    return _write


# user -> util through interfaces; billing is consumed only by the api base
CLOJURE_WORKSPACE = {
    "workspace.edn": '{:top-namespace "acme" :interface-ns "interface"}\n',
    "components/user/src/acme/user/interface.clj": """
        (ns acme.user.interface
          (:require [acme.user.core :as core]))
        (defn find-user [id] (core/find-user id))
    """,
    "components/user/src/acme/user/core.clj": """
        (ns acme.user.core
          (:require [acme.util.interface :as util]))
        (defn find-user [id] (util/normalize id))
    """,
    "components/util/src/acme/util/interface.clj": """
        (ns acme.util.interface
          (:require [acme.util.impl :as impl]))
        (defn normalize [x] (impl/normalize x))
    """,
    "components/util/src/acme/util/impl.clj": """
        (ns acme.util.impl)
        (defn normalize [x] x)
    """,
    "components/billing/src/acme/billing/core.clj": """
        (ns acme.billing.core
          (:require [acme.user.interface :as user]
                    [acme.util.interface :as util]))
    """,
    "bases/api/src/acme/api/main.clj": """
        (ns acme.api.main
          (:require [acme.billing.core]
                    [acme.user.interface :as user]))
    """,
}


# cart is an entry point; pricing leaks its implementation module to cart
PYTHON_WORKSPACE = {
    "workspace.toml": """
        [tool.polylith]
        namespace = "shop"
    """,
    "components/shop/cart/__init__.py": "from shop.cart.core import add\n",
    "components/shop/cart/core.py": """
        import shop.pricing.core


        def add(item):
            return shop.pricing.core.price(item)
    """,
    "components/shop/pricing/__init__.py": "",
    "components/shop/pricing/core.py": """
        def price(item):
            return 1
    """,
    "bases/shop/api/app.py": "from shop.cart import add\n",
}


@pytest.fixture
def clojure_workspace(write_tree):
    return write_tree(CLOJURE_WORKSPACE)


@pytest.fixture
def python_workspace(write_tree):
    return write_tree(PYTHON_WORKSPACE)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Keep user-level config files and POLYMETRICS_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("POLYMETRICS_"):
            monkeypatch.delenv(key)
