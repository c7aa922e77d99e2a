from grabble.trie import Trie


def make_trie(*words):
    trie = Trie()
    for w in words:
        trie.insert(w)
    return trie


def test_insert_and_lookup():
    trie = make_trie("CAT", "CART", "DOG")
    assert trie.is_word("CAT")
    assert trie.is_word("CART")
    assert not trie.is_word("CA")
    assert not trie.is_word("CARTS")


def test_lookup_is_case_insensitive():
    trie = make_trie("cat")
    assert trie.is_word("CAT")
    assert trie.is_word("cAt")
    assert "cat" in trie


def test_prefix_queries():
    trie = make_trie("STONE", "STAR")
    assert trie.is_prefix("ST")
    assert trie.is_prefix("STO")
    assert trie.is_prefix("STAR")
    assert not trie.is_prefix("SX")
    assert trie.is_prefix("")


def test_terminal_nodes_store_full_word():
    trie = make_trie("tea")
    node = trie.root.children["T"].children["E"].children["A"]
    assert node.is_terminal
    assert node.word == "TEA"
    assert trie.root.children["T"].word is None


def test_iteration_and_count():
    trie = make_trie("CAT", "CATS", "DOG", "CAT")
    assert sorted(trie) == ["CAT", "CATS", "DOG"]
    assert trie.word_count() == 3


def test_contains_ignores_non_strings():
    trie = make_trie("CAT")
    assert 3 not in trie
