from link_announcer.renderers import RendererChain
from link_announcer.retrieval.normalize import parse_url


class Recorder:
    def __init__(self, answer, log):
        self.answer = answer
        self.log = log

    def try_render(self, parsed):
        self.log.append(self)
        return self.answer


def test_first_claim_wins_in_registration_order():
    """
    WHY: Renderers registered earlier get first refusal.
    HOW: Register a decliner, then two claimers.
    EXPECTED: The first claimer is returned and the second is never asked.
    """
    log = []
    decline, first, second = Recorder(False, log), Recorder(True, log), Recorder(True, log)
    chain = RendererChain()
    for r in (decline, first, second):
        chain.register(r)

    assert chain.try_render(parse_url("http://example.com/")) is first
    assert log == [decline, first]


def test_register_is_idempotent_per_instance():
    log = []
    renderer = Recorder(False, log)
    chain = RendererChain()
    chain.register(renderer)
    chain.register(renderer)
    chain.register(Recorder(False, log))
    assert len(chain) == 2


def test_only_true_counts_as_claim():
    chain = RendererChain()
    chain.register(Recorder("yes", []))
    assert chain.try_render(parse_url("http://example.com/")) is None


def test_empty_chain():
    assert RendererChain().try_render(parse_url("http://example.com/")) is None
