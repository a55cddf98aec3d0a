from fastqc_lite.sequence import Sequence, reverse_complement


def test_source_case():
    s = Sequence("AAAATTTTCCCCGGGG")
    rc = ~s
    assert s.text == "AAAATTTTCCCCGGGG"
    assert rc.text == "CCCCGGGGAAAATTTT"


def test_method_matches_operator():
    s = Sequence("ACGTTGCA")
    assert s.reverse_complement() == ~s


def test_function_is_involution_on_uppercase():
    seq = "GATTACAGATTACA"
    assert reverse_complement(reverse_complement(seq)) == seq


def test_lowercase_is_complemented_to_uppercase():
    assert reverse_complement("acgt") == "ACGT"


def test_unknown_bases_become_n():
    assert reverse_complement("AXN") == "NNT"


def test_length_and_str():
    s = Sequence("ACGTA")
    assert len(s) == len("ACGTA")
    assert str(s) == "ACGTA"
    assert len(~s) == len(s)


def test_empty():
    assert reverse_complement("") == ""