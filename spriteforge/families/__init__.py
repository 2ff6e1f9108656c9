from spriteforge.families import armor, creature, interactive, magical, rock, scroll, torch

ALL_FAMILIES = (
    armor.SPEC,
    torch.SPEC,
    scroll.SPEC,
    magical.SPEC,
    creature.SPEC,
    rock.SPEC,
    interactive.SPEC,
)
