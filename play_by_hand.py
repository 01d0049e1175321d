import poker_survivor # noqa
import gymnasium as gym

env = gym.make("PokerSurvivor/CardPickup-v0", render_mode="ansi")
observation, info = env.reset()

done = False
while not done:
    print(env.render())

    print(env.get_wrapper_attr('valid_actions')(), "(0 = skip, 1 = collect)")
    action = int(input("Enter action: "))
    obs, reward, terminated, truncated, info = env.step(action)
    done = terminated or truncated
    print(f"Kills: {reward:.0f}  Weapon: {info['weapon']}")

env.close()
