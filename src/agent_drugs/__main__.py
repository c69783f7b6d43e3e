from agent_drugs import main

main()
