from chessduel.config import MATE_THRESHOLD


def format_search_info(depth, score, nodes, elapsed, move_san, mate_threshold=MATE_THRESHOLD, **extra):
    nps = int(nodes / elapsed) if elapsed > 0 else 0

    if abs(score) >= mate_threshold:
        score_str = f"mate {'white' if score > 0 else 'black'}"
    else:
        score_str = f"eval {score:+.2f}"

    extra_str = "".join(f" {k} {v:.2f}" for k, v in extra.items())
    return f"info depth {depth} score {score_str} nodes {nodes} nps {nps} time {elapsed * 1000:.0f}ms{extra_str} move {move_san}"
