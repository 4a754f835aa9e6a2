# examples/register_star_demo.py
# Run with: python examples/register_star_demo.py

from dataclasses import replace

from starchain import Blockchain, ExpiredChallenge, IdentityKeyPair


class SteppingClock:
    """Manual clock so the demo can show a challenge expiring."""

    def __init__(self, now: int):
        self.now = now

    def __call__(self) -> int:
        return self.now


# =============================================================================
# DEMO
# =============================================================================

if __name__ == "__main__":
    clock = SteppingClock(1_770_000_000)
    chain = Blockchain(clock=clock)

    alice = IdentityKeyPair.generate()
    bob = IdentityKeyPair.generate()

    # 1. Each owner requests a challenge, signs it, and submits a star
    for owner, story in [(alice, "Seen from the porch"), (bob, "First telescope"), (alice, "Wedding night")]:
        message = chain.issue_challenge(owner.identity)
        block = chain.submit_star(
            owner.identity,
            message,
            owner.sign(message),
            {"dec": "68° 52' 56.9", "ra": "16h 29m 1.0s", "story": story},
        )
        print(f"Registered '{story}' at height {block.height} ({block.hash[:16]}…)")

    print(f"\nChain height: {chain.get_chain_height()}")
    print(f"Alice's stars: {[s['star']['story'] for s in chain.get_stars_by_owner(alice.identity)]}")

    # 2. A challenge older than 5 minutes is refused
    stale = chain.issue_challenge(bob.identity)
    clock.now += 5 * 60
    try:
        chain.submit_star(bob.identity, stale, bob.sign(stale), {"story": "Too late"})
    except ExpiredChallenge as e:
        print(f"\nRejected: {e}")

    # 3. Validation on the untouched chain, then on a tampered copy
    print("\n" + str(chain.validate_chain()))

    tampered = chain.get_chain()
    tampered[2] = replace(tampered[2], time=tampered[2].time + 1)
    print(chain.validator.validate(tampered))
