from kmap_loops.share import (
    BatchItem,
    ShareState,
    batch_to_csv,
    decode_share_params,
    encode_share_params,
    parse_int_list,
)


def test_encode_omits_empty_dont_cares():
    assert encode_share_params(4, [0, 2, 8, 10]) == {"v": "4", "m": "0,2,8,10"}
    assert encode_share_params(3, [1], [5, 7]) == {"v": "3", "m": "1", "d": "5,7"}


def test_decode():
    state = decode_share_params({"v": "3", "m": "1, 3", "d": "5,x,7"})
    assert state == ShareState(nvars=3, minterms=(1, 3), dontcares=(5, 7))
    assert decode_share_params(encode_share_params(4, [0, 2])) == ShareState(4, (0, 2))


def test_decode_missing_or_bad():
    assert decode_share_params({"m": "1"}) is None
    assert decode_share_params({"v": "4"}) is None
    assert decode_share_params({"v": "four", "m": "1"}) is None


def test_parse_int_list():
    assert parse_int_list(" 1, 3,,x, 5 ") == [1, 3, 5]
    assert parse_int_list(None) == []


def test_batch_csv():
    items = [
        BatchItem(3, (1, 3), (5, 7), "C"),
        BatchItem(2, (0, 1), (), "A'"),
    ]
    assert batch_to_csv(items) == (
        "Variables,Minterms,Dont Cares,Expression\n"
        '3,"1,3","5,7",C\n'
        "2,\"0,1\",,A'\n"
    )
